"""Named dataset references."""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd


@dataclass(frozen=True, eq=False)
class Dataset:
    """A pandas DataFrame with a display name.

    DataFrames are unhashable and print as whole tables. Wrapping one gives
    constraints a hashable reference (identity-based) whose textual form is
    the name, which is what reports show as ``referenceTable``.

    Examples:
        >>> customers = Dataset(pd.DataFrame({"id": [1, 2]}), name="customers")
        >>> str(customers)
        'customers'
    """

    frame: pd.DataFrame
    name: str

    def __str__(self) -> str:
        return self.name

    def __len__(self) -> int:
        return len(self.frame)


def frame_of(data) -> pd.DataFrame:
    """Return the DataFrame behind a dataset reference."""
    if isinstance(data, Dataset):
        return data.frame
    return data


__all__ = ["Dataset", "frame_of"]
