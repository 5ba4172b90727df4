"""
app/repositories package marker.
"""

from app.repositories.memory_store import InMemoryOnboardingStore
from app.repositories.onboarding_store import OnboardingStore, OnboardingStoreError
from app.repositories.sqlalchemy_store import SQLAlchemyOnboardingStore

__all__ = [
    "InMemoryOnboardingStore",
    "OnboardingStore",
    "OnboardingStoreError",
    "SQLAlchemyOnboardingStore",
]
