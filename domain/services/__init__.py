"""
Domain services containing pure business logic.
"""

from domain.services.performance_balancer import PerformanceBalancer
from domain.services.rating_balancer import RatingBalancer

__all__ = ["PerformanceBalancer", "RatingBalancer"]
