from typing import Iterable, List, Optional


def csv_to_list(v: str | List[str] | None) -> List[str]:
    if v is None:
        return []
    if isinstance(v, list):
        return [s.strip() for s in v if s and str(s).strip()]
    return [s.strip() for s in str(v).split(",") if s.strip()]


def join_non_blank(values: Iterable[Optional[str]], sep: str = "/") -> str:
    """Join the non-blank values with `sep`, e.g. stream languages -> "eng/fre"."""
    return sep.join(str(v).strip() for v in values if v is not None and str(v).strip())
