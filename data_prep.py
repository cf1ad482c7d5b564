import logging

import numpy as np
import pandas as pd

from scenes import NO_FILTER, SCENES

logger = logging.getLogger(__name__)

#csv header -> internal column name
SOURCE_COLUMNS = {
    "CountryName":         "country",
    "Region":              "region",
    "Year":                "year",
    "GDP":                 "gdp",
    "MilitaryExpenditure": "milex_pct",
}
NUMERIC_COLUMNS = ["year", "gdp", "milex_pct"]
POINT_COLUMNS = ["country", "region", "mean_gdp", "mean_milex_pct", "milex_abs"]


def coerce_records(raw: pd.DataFrame) -> pd.DataFrame:
    """Rename the source columns and coerce the numeric ones.

    Unreadable numbers become NaN so the means skip them instead of being
    poisoned by them. Rows without a country, region or year can't be placed
    on the chart at all and are dropped.
    """
    missing = [c for c in SOURCE_COLUMNS if c not in raw.columns]
    if missing:
        raise ValueError(f"data is missing required columns: {', '.join(missing)}")

    df = raw[list(SOURCE_COLUMNS)].rename(columns=SOURCE_COLUMNS).copy()

    #coerce; count what didn't survive
    for c in NUMERIC_COLUMNS:
        before = df[c].notna()
        df[c] = pd.to_numeric(df[c], errors="coerce")
        lost = int((before & df[c].isna()).sum())
        if lost:
            logger.warning("%d unreadable value(s) in column %s treated as unknown", lost, c)

    df[["gdp", "milex_pct"]] = df[["gdp", "milex_pct"]].replace([np.inf, -np.inf], np.nan)

    #drop rows we can't place; inf or fractional years name no real year
    year_ok = np.isfinite(df["year"]) & (df["year"] == df["year"].round())
    keep = df["country"].notna() & df["region"].notna() & year_ok
    dropped = int((~keep).sum())
    if dropped:
        logger.warning("dropping %d row(s) without country, region or a whole year", dropped)
    df = df[keep].copy()
    df["year"] = df["year"].astype(int)
    df["country"] = df["country"].astype(str).str.strip()
    df["region"] = df["region"].astype(str).str.strip()
    return df.reset_index(drop=True)


def load_records(source) -> pd.DataFrame:
    #source can be a local path or a raw url, pandas handles both
    raw = pd.read_csv(source)
    records = coerce_records(raw)
    logger.info("loaded %d records (%d countries, years %s-%s) from %s",
                len(records), records["country"].nunique(),
                records["year"].min() if not records.empty else "?",
                records["year"].max() if not records.empty else "?",
                source)
    return records


def aggregate_year(records: pd.DataFrame, year: int) -> pd.DataFrame:
    """One row per (country, region) present in ``year``.

    Means skip unknown values; ``milex_abs`` is the absolute spend in US$
    billions (mean GDP x mean share / 100). Nothing is rounded here.
    """
    need = records[records["year"] == int(year)]
    if need.empty:
        logger.debug("no records for year %s", year)
        return pd.DataFrame(columns=POINT_COLUMNS)

    points = (
        need.groupby(["country", "region"], as_index=False, sort=False)
            .agg(mean_gdp=("gdp", "mean"),
                 mean_milex_pct=("milex_pct", "mean"))
    )
    points["milex_abs"] = points["mean_gdp"] * points["mean_milex_pct"] / 100
    return points[POINT_COLUMNS]


def region_order(records: pd.DataFrame) -> list[str]:
    #narrative regions first so colors match the story, then anything else
    story = [s for s in SCENES if s != NO_FILTER]
    extra = sorted(set(records["region"].dropna().unique().tolist()) - set(story))
    return story + extra
