import os

import pandas as pd

from default_df_initializer import DefaultDfInitializer


class UnsupportedFileType(ValueError):
    pass


class FileTypeHandler:
    SUPPORTED = {".csv", ".parquet"}

    def __init__(self, path: str, index_col=None):
        self.path = path
        self.index_col = index_col
        _, ext = os.path.splitext(path)
        self.ext = ext.lower()

        if self.ext not in self.SUPPORTED:
            raise UnsupportedFileType(
                f"Unsupported file type {self.ext or '(none)'} (use .csv or .parquet)"
            )

    def load(self) -> pd.DataFrame:
        if not os.path.exists(self.path) or os.path.getsize(self.path) == 0:
            return DefaultDfInitializer().create()

        if self.ext == ".csv":
            try:
                df = pd.read_csv(self.path, index_col=self.index_col)
            except pd.errors.EmptyDataError:
                return DefaultDfInitializer().create()
        else:
            self._ensure_parquet_engine()
            df = pd.read_parquet(self.path)
            if self.index_col is not None:
                df = df.set_index(self.index_col)

        if not df.index.is_unique:
            raise ValueError(f"{self.path}: row keys must be unique")
        return df

    def _ensure_parquet_engine(self):
        try:
            import pyarrow  # noqa: F401
        except ImportError as exc:
            raise UnsupportedFileType(
                "Parquet support requires pyarrow. Install via: pip install pyarrow"
            ) from exc
