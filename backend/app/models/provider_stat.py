"""
TranslationProviderStat Model - Provider Selection Analytics

One row per translation provider, created on its first selection and
only ever incremented afterwards.
"""
from sqlalchemy import Column, String, DateTime, Integer

from .database import Base


class TranslationProviderStat(Base):
    """Cumulative selection counters for a translation provider"""
    __tablename__ = "translation_provider_stats"

    provider = Column(String(32), primary_key=True)

    selection_count = Column(Integer, nullable=False, default=0)
    total_latency_ms = Column(Integer, nullable=False, default=0)

    last_selected_at = Column(DateTime, nullable=True)

    def __repr__(self):
        return f"<TranslationProviderStat {self.provider} x{self.selection_count}>"
