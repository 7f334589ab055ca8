from __future__ import annotations

from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    import numpy as np
    import pandas as pd
    import polars as pl
    import pyarrow as pa

    #: Union of the one-hot input types accepted by :func:`apriorix.apriori`:
    #:
    #: * ``pandas.DataFrame`` – dense or sparse-backed
    #: * ``polars.DataFrame`` – converted to pandas
    #: * ``numpy.ndarray`` – 2-D boolean / 0-1 matrix
    #: * ``pyarrow.Table`` – converted to pandas
    DataFrame = Union[pd.DataFrame, pl.DataFrame, np.ndarray, pa.Table]  # noqa: UP007


def frame_kind(data: Any) -> str:
    """Name the library a frame-like object comes from: pandas, polars, pyarrow or other."""
    _type = type(data)
    mod = getattr(_type, "__module__", "") or ""
    if _type.__name__ == "Table" and mod.startswith("pyarrow"):
        return "pyarrow"
    if _type.__name__ == "DataFrame":
        if mod.startswith("polars"):
            return "polars"
        if mod.startswith("pandas"):
            return "pandas"
    return "other"


def to_dataframe(data: Any) -> Any:
    """Coerce Polars/PyArrow inputs to a pandas DataFrame; return everything else unchanged."""
    kind = frame_kind(data)

    if kind in ("pyarrow", "polars"):
        return data.to_pandas()
    return data
