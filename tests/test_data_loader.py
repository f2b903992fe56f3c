"""pandas adapters for candidates and fundamentals."""

import numpy as np
import pandas as pd
import pytest

from value_rotation.data_loader import candidates_from_frame, fundamentals_from_frame
from value_rotation.models import FundamentalRecord, SecurityDescriptor


def test_candidates_from_frame():
    frame = pd.DataFrame(
        {
            "symbol": ["AAA", "BBB"],
            "market": ["usa", "usa"],
            "dollar_volume": [2e6, 5e5],
            "price": [12, 3.5],
            "extra": [1, 2],
        }
    )

    assert candidates_from_frame(frame) == [
        SecurityDescriptor("AAA", "usa", 2e6, 12.0),
        SecurityDescriptor("BBB", "usa", 5e5, 3.5),
    ]


def test_fundamentals_from_frame_maps_nan_to_none():
    frame = pd.DataFrame(
        {
            "symbol": ["AAA", "BBB"],
            "pe_ratio": [10.0, np.nan],
            "pe_ratio_5y_avg": [20.0, 15.0],
            "roic": [0.3, np.nan],
        }
    )

    records = fundamentals_from_frame(frame)

    assert records[0] == FundamentalRecord("AAA", 10.0, 20.0, 0.3)
    assert records[0].value_score == pytest.approx(0.5)
    assert records[1] == FundamentalRecord("BBB", None, 15.0, None)
    assert records[1].value_score is None


def test_missing_columns_are_reported():
    with pytest.raises(KeyError, match="roic"):
        fundamentals_from_frame(pd.DataFrame({"symbol": [], "pe_ratio": [], "pe_ratio_5y_avg": []}))
