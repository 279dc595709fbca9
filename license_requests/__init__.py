"""
License requests module - the license request lifecycle.

This module handles:
- LicenseRequest entity and its state machine
- Create, edit, decide (approve/reject/exempt) and delete operations
- The unit of work that commits request, payment and license changes atomically
"""
