from __future__ import annotations
import io
import hashlib
from typing import Dict, Iterable, List
import pandas as pd

from .constants import CSV_HEADERS, HEADER_ALIASES, normalize_name, normalize_role
from .models import Player

_TRUTHY = {"1", "true", "yes", "y", "active", "x"}


def _header_map(cols: Iterable[str]) -> Dict[str, str]:
    """
    Build a mapping from provided column -> canonical header.
    Case-insensitive, uses HEADER_ALIASES, leaves unknown columns untouched.
    """
    out = {}
    for c in cols:
        lc = str(c).strip().lower()
        mapped = None
        for k, aliases in HEADER_ALIASES.items():
            if lc == k.lower() or lc in aliases:
                mapped = k
                break
        out[c] = mapped if mapped else c
    return out


def _parse_active(v) -> bool:
    if v is None or (isinstance(v, float) and pd.isna(v)) or str(v).strip() == "":
        return True
    return str(v).strip().lower() in _TRUTHY


def _row_to_player(row: Dict, id_counts: Dict[str, int]) -> Player:
    name = normalize_name(str(row.get("Name", "") or ""))
    pid = str(row.get("id", "") or "").strip()
    if not pid:
        # deterministic short id by name hash; suffix counter avoids collisions
        base = hashlib.md5(name.lower().encode()).hexdigest()[:8]
        n = id_counts.get(base, 0)
        id_counts[base] = n + 1
        pid = base if n == 0 else f"{base}-{n}"
    return Player(
        id=pid,
        name=name,
        role=normalize_role(str(row.get("Role", "") or "")),
        active=_parse_active(row.get("Active")),
    )


def parse_roster_csv(file) -> List[Player]:
    """
    Parse an uploaded roster CSV (bytes or file-like).
    Rows without a name are skipped; unknown roles raise ValueError.
    """
    if isinstance(file, (bytes, bytearray)):
        df = pd.read_csv(io.BytesIO(file), dtype=str, keep_default_na=False)
    else:
        df = pd.read_csv(file, dtype=str, keep_default_na=False)

    df = df.rename(columns=_header_map(df.columns))
    if "Name" not in df.columns:
        raise ValueError("Missing required column: Name")
    for k in CSV_HEADERS:
        if k not in df.columns:
            df[k] = ""

    id_counts: Dict[str, int] = {}
    players: List[Player] = []
    seen = set()
    for _, r in df[CSV_HEADERS].iterrows():
        if str(r.get("Name", "")).strip() == "":
            continue
        p = _row_to_player(r.to_dict(), id_counts)
        if p.id in seen:
            raise ValueError(f"Duplicate player id detected: {p.id}")
        seen.add(p.id)
        players.append(p)
    return players


def roster_to_dataframe(players: List[Player]) -> pd.DataFrame:
    rows = [{"id": p.id, "Name": p.name, "Role": p.role, "Active": p.active} for p in players]
    return pd.DataFrame(rows, columns=CSV_HEADERS)


def save_roster_csv_bytes(players: List[Player]) -> bytes:
    buf = io.StringIO()
    roster_to_dataframe(players).to_csv(buf, index=False)
    return buf.getvalue().encode("utf-8")


def build_template_csv() -> bytes:
    example = (
        "Name,Role,Active\n"
        "Alex Quinn,Guard,true\n"
        "Sam Ortiz,Flex,true\n"
    )
    return example.encode("utf-8")
