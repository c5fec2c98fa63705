from typing import Any, Dict, Iterable, Mapping, Optional, TypeVar

from typing_extensions import TypeAlias

_K = TypeVar("_K", bound=Any)
_V = TypeVar("_V", bound=Any)

DictTree: TypeAlias = Dict[str, "DictTree"]


def dicttree_merge(dict1: Mapping[_K, _V], dict2: Mapping[_K, _V]) -> Dict[_K, _V]:
    new = {
        **dict1,
        **dict2,
    }

    for k, v1 in dict1.items():
        if not isinstance(v1, dict):
            continue

        v2 = dict2.get(k)
        if isinstance(v2, Mapping):
            new[k] = dicttree_merge(v1, v2)  # type: ignore

    return new


def dig(data: Optional[Mapping[str, Any]], parts: Iterable[str]) -> Any:
    """Walk `parts` into nested mappings.

    Missing keys, `None` and non mapping intermediate values resolve to `None`.
    """
    current: Any = data
    for part in parts:
        if not isinstance(current, Mapping):
            return None
        current = current.get(part)

    return current


def compact_dict(data: Mapping[_K, Optional[_V]]) -> Dict[_K, _V]:
    return {k: v for k, v in data.items() if v is not None}
