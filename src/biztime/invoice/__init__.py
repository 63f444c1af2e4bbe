"""
Invoice

This module provides data access for the invoices table.
"""

from biztime.invoice.repository import InvoiceRepository

__all__ = ["InvoiceRepository"]
