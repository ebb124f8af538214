"""
Visit quota reconciliation: grouping, synthetic generation, sorting.
"""
from checkin_etl.transformers.visits.flatten import flatten, sort_visits
from checkin_etl.transformers.visits.generator import RetryBudget, SyntheticVisitGenerator
from checkin_etl.transformers.visits.grouper import group_visitors
from checkin_etl.transformers.visits.quota_resolver import QuotaResolver
from checkin_etl.transformers.visits.quota_transformer import VisitQuotaTransformer
from checkin_etl.transformers.visits.reconciler import QuotaReconciler

__all__ = [
    'QuotaReconciler',
    'QuotaResolver',
    'RetryBudget',
    'SyntheticVisitGenerator',
    'VisitQuotaTransformer',
    'flatten',
    'group_visitors',
    'sort_visits',
]
