"""
Licenses module - License issuance and account validation.

This module handles:
- License entity and key generation
- License issuance for approved requests and direct admin issuance
- License administration (update, delete, expiration sweep)
- Account validation for the MT5 client
"""
