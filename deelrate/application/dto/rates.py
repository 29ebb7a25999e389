"""
Rate DTOs exchanged with the rate provider port.
"""
from __future__ import annotations
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict

# CoinAPI reports 7 fractional digits; datetime keeps 6
_FRACTION = re.compile(r"(\.\d{6})\d+")


@dataclass(frozen=True)
class RateQuote:
    """
    Raw rate as reported by a provider, before domain validation.

    Attributes:
        base_asset: Base asset symbol as reported (e.g. "BTC")
        quote_asset: Quote asset symbol as reported (e.g. "USDT")
        rate: Units of quote per one unit of base
        timestamp: Provider observation time
    """
    base_asset: str
    quote_asset: str
    rate: Decimal
    timestamp: datetime

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> RateQuote:
        """Create from a CoinAPI-style payload (asset_id_base, asset_id_quote, rate, time)."""
        raw_time = data.get("time")
        if isinstance(raw_time, datetime):
            timestamp = raw_time
        elif raw_time:
            text = _FRACTION.sub(r"\1", str(raw_time)).replace("Z", "+00:00")
            timestamp = datetime.fromisoformat(text)
        else:
            timestamp = datetime.now(timezone.utc)

        return cls(
            base_asset=str(data.get("asset_id_base", "")),
            quote_asset=str(data.get("asset_id_quote", "")),
            rate=Decimal(str(data.get("rate", 0))),
            timestamp=timestamp,
        )
