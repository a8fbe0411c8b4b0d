import pandas as pd


class DefaultDfInitializer:
    """Sample table used when no file is given: keys 0, 1 and 4."""

    def create(self) -> pd.DataFrame:
        return pd.DataFrame(
            {"a": ["hello", "there", "world"], "b": [1.0, 2.0, 2.0]},
            index=pd.Index([0, 1, 4], name="key"),
        )
