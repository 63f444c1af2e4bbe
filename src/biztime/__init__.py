"""BizTime: companies and invoices over PostgreSQL."""
