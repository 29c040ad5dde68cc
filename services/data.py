"""
Data loading services for the Lens Aperture Comparator.

This module reads the static lens catalog:
- One TSV file, long format, one row per knot
- Rows grouped by lens id in file order
- Knots sorted by focal length, duplicate focal lengths dropped

Malformed rows (unknown format or data source, missing or non-positive
numbers) are logged and skipped; the catalog is never partially mutated.
"""
import logging
from pathlib import Path
from typing import List, Optional, Union

import numpy as np
import pandas as pd

from models.constants import LENS_DATA_FILE, LENS_COLUMNS
from models.core import DataSource, Knot, LensCatalog, LensFormat, LensSpec

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = [LENS_COLUMNS[key] for key in
                    ('id', 'name', 'format', 'data_source', 'focal_length', 'aperture')]


def parse_lens_table(path: Union[str, Path]) -> Optional[pd.DataFrame]:
    """Parse the catalog TSV with error handling and cleaning."""
    try:
        df = pd.read_csv(path, sep="\t", dtype={LENS_COLUMNS['id']: str})
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        logger.error(f"Failed to load {path}: {str(e)}")
        return None

    # Clean column names
    df.columns = [str(c).strip() for c in df.columns]

    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        logger.error(f"{path} is missing columns: {', '.join(missing)}")
        return None

    if LENS_COLUMNS['source_url'] not in df.columns:
        df[LENS_COLUMNS['source_url']] = np.nan

    for key in ('focal_length', 'aperture'):
        df[LENS_COLUMNS[key]] = pd.to_numeric(df[LENS_COLUMNS[key]], errors="coerce")

    # Drop knots that cannot be plotted
    valid = (
        df[LENS_COLUMNS['id']].notna()
        & (df[LENS_COLUMNS['focal_length']] > 0)
        & (df[LENS_COLUMNS['aperture']] > 0)
    )
    if not valid.all():
        logger.warning(f"Skipping {int((~valid).sum())} invalid knot row(s) in {path}")
    return df[valid].reset_index(drop=True)


def build_lens(lens_id: str, group: pd.DataFrame) -> Optional[LensSpec]:
    """
    Build one LensSpec from its knot rows.

    Args:
        lens_id: Lens identifier
        group: Rows of the long-format table belonging to this lens

    Returns:
        LensSpec, or None when the metadata is invalid
    """
    first = group.iloc[0]
    try:
        fmt = LensFormat(str(first[LENS_COLUMNS['format']]).strip())
        source = DataSource(str(first[LENS_COLUMNS['data_source']]).strip())
    except ValueError as e:
        logger.warning(f"Skipping lens {lens_id}: {e}")
        return None

    knots_df = (
        group[[LENS_COLUMNS['focal_length'], LENS_COLUMNS['aperture']]]
        .drop_duplicates(subset=LENS_COLUMNS['focal_length'], keep="first")
        .sort_values(LENS_COLUMNS['focal_length'], kind="stable")
    )
    if len(knots_df) < len(group):
        logger.warning(f"Lens {lens_id}: dropped {len(group) - len(knots_df)} duplicate focal length(s)")

    knots = tuple(
        Knot(focal_length=float(f), aperture=float(a))
        for f, a in knots_df.itertuples(index=False, name=None)
    )

    url = first[LENS_COLUMNS['source_url']]
    return LensSpec(
        id=lens_id,
        name=str(first[LENS_COLUMNS['name']]).strip(),
        format=fmt,
        data_source=source,
        knots=knots,
        source_url=str(url).strip() if pd.notnull(url) and str(url).strip() else None,
    )


def create_empty_lens_catalog() -> LensCatalog:
    """Create an empty lens catalog."""
    return LensCatalog(lenses=(), df=pd.DataFrame(columns=list(LENS_COLUMNS.values())))


def load_lens_catalog(path: Union[str, Path] = LENS_DATA_FILE) -> LensCatalog:
    """
    Load the lens catalog from a TSV file.

    Args:
        path: Catalog file, defaults to data/lenses.tsv

    Returns:
        LensCatalog with lenses in file order (empty if the file is unusable)
    """
    df = parse_lens_table(path)
    if df is None or df.empty:
        return create_empty_lens_catalog()

    lenses: List[LensSpec] = []
    for lens_id, group in df.groupby(LENS_COLUMNS['id'], sort=False):
        lens = build_lens(str(lens_id), group)
        if lens is not None:
            lenses.append(lens)

    logger.info(f"Loaded {len(lenses)} lenses from {path}")
    return LensCatalog(lenses=tuple(lenses), df=df)
