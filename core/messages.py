"""Operator-facing recommendation messages."""
from __future__ import annotations

from typing import Dict

from core.models import Recommendation


MESSAGES: Dict[str, Dict[str, str]] = {
    'fi': {
        'buy': 'Osta {ticker} tänään!',
        'none': 'Istu käsien päällä, tänään ei mitään ostettavaa!',
    },
    'en': {
        'buy': 'Buy {ticker} today!',
        'none': 'Sit on your hands, nothing to buy today!',
    },
}


def format_recommendation(recommendation: Recommendation, language: str = 'fi') -> str:
    """Render a recommendation as one line; unknown languages use English."""
    templates = MESSAGES.get(language.lower(), MESSAGES['en'])
    if recommendation.is_buy:
        return templates['buy'].format(ticker=recommendation.ticker)
    return templates['none']
