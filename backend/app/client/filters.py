from typing import Dict, Mapping, Optional


def category_query(params: Optional[Mapping[str, str]], label: str) -> Dict[str, str]:
    """
    Listing filters after clicking a category: selects ``label``, or clears the
    category filter when ``label`` is already the active one.
    """
    current = dict(params or {})
    if current.get("category") == label:
        current.pop("category")
    else:
        current["category"] = label
    return current
