"""
Payments module - manually verified payments for subscription plans.

This module handles:
- Payment entity and its verification state machine
- Payment submission by request owners
- Admin verification or rejection, issuing the license on verification
"""
