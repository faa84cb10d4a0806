"""Normalisation helpers shared by the period filter and the aggregator."""

from __future__ import annotations

import numpy as np
import pandas as pd

from . import utils
from .models import DEFAULT_CATEGORY


def prepare_transactions(transactions) -> pd.DataFrame:
    """Return a copy with typed columns and the derived fields used downstream.

    - ``transaction_date`` becomes a midnight ``datetime64`` (pure date).
    - ``amount`` becomes a non-negative float magnitude.
    - ``category`` falls back to ``"Others"`` when missing or blank.
    - ``signed_amount`` and ``day_label`` are added for totals and trends.
    """

    df = utils.ensure_dataframe(transactions).copy()

    for column in utils.TRANSACTION_COLUMNS:
        if column not in df:
            df[column] = None

    df["transaction_date"] = pd.to_datetime(df["transaction_date"]).dt.normalize()
    df["amount"] = pd.to_numeric(df["amount"]).astype(float)

    category = df["category"].astype("object")
    blank = category.isna() | (category.astype(str).str.strip() == "")
    df["category"] = category.where(~blank, DEFAULT_CATEGORY)

    df["signed_amount"] = np.where(df["type"] == "income", df["amount"], -df["amount"])
    df["day_label"] = (
        df["transaction_date"].dt.day.astype("Int64").astype(str)
        + " "
        + df["transaction_date"].dt.strftime("%b")
    )

    return df
