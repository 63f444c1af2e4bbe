from biztime.api.routes.companies import bp as companies_bp
from biztime.api.routes.invoices import bp as invoices_bp

__all__ = ["companies_bp", "invoices_bp"]
