"""Services Layer — seminar and user rule layers plus their stores.

Invariants:
    - Services flush into the caller's AsyncSession and never commit
    - Pure checks come from core/; services sequence them around IO
"""
