"""
Kakeibo - Household Ledger Package

An interactive household account book. Entries typed at a prompt are
resolved to a calendar date and a named account, then filed into
per-account YAML ledgers.

DESIGN PRINCIPLES:
1. One file per account, one account per file
2. Resolution happens before mutation
3. No silent corrections
4. Nothing is written until the session saves
"""

__version__ = "1.0.0"
__author__ = "Kakeibo Team"
