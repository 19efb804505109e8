# src/twitter_rest/utils/params.py
"""
Разворачивание вложенных параметров в плоский список пар.

Используется Multipart и UrlEncoded middleware:
    {"media": {"id": 1}, "ids": [1, 2]} -> [("media[id]", 1), ("ids[]", 1), ("ids[]", 2)]
"""

from typing import Any, List, Mapping, Optional, Tuple, Union

from ..core.messages import UploadPart


def flatten_params(params: Mapping[str, Any], parent: Optional[str] = None) -> List[Tuple[str, Any]]:
    """
    Развернуть вложенные mapping/list в пары (имя, значение).

    None значения пропускаются. UploadPart и bytes остаются как есть.

    Args:
        params: Параметры запроса
        parent: Префикс имени (для рекурсии)

    Returns:
        Список пар в порядке обхода
    """
    pairs: List[Tuple[str, Any]] = []
    for key, value in params.items():
        name = f"{parent}[{key}]" if parent else str(key)
        _flatten_value(name, value, pairs)
    return pairs


def _flatten_value(name: str, value: Any, pairs: List[Tuple[str, Any]]) -> None:
    if value is None:
        return
    if isinstance(value, Mapping):
        pairs.extend(flatten_params(value, name))
    elif isinstance(value, (list, tuple)):
        for item in value:
            _flatten_value(f"{name}[]", item, pairs)
    else:
        pairs.append((name, value))


def to_text(value: Any) -> Union[str, bytes]:
    """
    Скаляр -> строка в формате API (True -> 'true').

    bytes возвращаются как есть: urlencode и urllib3 принимают их
    без перекодирования.
    """
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    return str(value)


def contains_upload(params: Mapping[str, Any]) -> bool:
    """Есть ли UploadPart на любой глубине."""
    return any(isinstance(value, UploadPart) for _, value in flatten_params(params))
