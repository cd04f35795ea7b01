"""Indicator routes."""
from ..domain.models import Indicator
from ..domain.schemas import IndicatorListItem
from .records import build_router

router = build_router(Indicator, IndicatorListItem)
