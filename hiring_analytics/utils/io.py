"""File I/O for tracker exports and normalized outputs."""

import tomllib
from pathlib import Path

import pandas as pd
from rich.console import Console

type FilePath = str | Path

console = Console()

TRACKER_ENCODINGS = ("utf-8-sig", "utf-8", "latin-1")


def read_tracker_file(path: FilePath) -> str:
    """Return the text of a tracker export, handling encoding quirks."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Tracker export not found: {path}")

    raw = path.read_bytes()
    for encoding in TRACKER_ENCODINGS:
        try:
            return raw.decode(encoding)
        except UnicodeDecodeError:
            continue
    raise ValueError(f"Could not decode {path}")


def write_output(df: pd.DataFrame, path: FilePath) -> Path:
    """Write a DataFrame in the format implied by the file suffix."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    match path.suffix.lower():
        case ".csv":
            df.to_csv(path, index=False)
        case ".parquet":
            df.to_parquet(path, index=False)
        case ".xlsx":
            df.to_excel(path, index=False)
        case ".json":
            df.to_json(path, orient="records", indent=2, date_format="iso")
        case other:
            raise ValueError(f"Unsupported output format: {other}")

    console.print(f"  Wrote {len(df)} rows to {path}")
    return path


def load_toml_config(path: FilePath) -> dict:
    """Load a TOML configuration file with the standard-library parser."""
    with open(path, "rb") as f:
        return tomllib.load(f)
