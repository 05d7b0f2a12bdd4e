"""Engine subpackage - plan table and quote calculation."""
from .pricing_engine import PricingEngine, compute_quote, find_plan
from .plans import PlanTableError, get_plans
from .models import PlanTier, PricedQuote, ConsultationQuote, Quote

__all__ = [
    'PricingEngine', 'compute_quote', 'find_plan', 'get_plans', 'PlanTableError',
    'PlanTier', 'PricedQuote', 'ConsultationQuote', 'Quote',
]
