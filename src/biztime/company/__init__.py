"""
Company

This module provides data access for the companies table.
"""

from biztime.company.repository import CompanyRepository

__all__ = ["CompanyRepository"]
