# File: robots_scout/parser/header_parser.py
"""robots_scout.parser.header_parser: Разбор HTTP-заголовков X-Robots-Tag."""

from __future__ import annotations

from typing import Dict, Iterable, Union

__all__ = ("X_ROBOTS_TAG", "parse_x_robots_tag")

X_ROBOTS_TAG = "X-Robots-Tag"

# rules whose own value contains a colon
_VALUED_RULES = frozenset(
    {"unavailable_after", "max-snippet", "max-image-preview", "max-video-preview"}
)

Key = Union[int, str]


def parse_x_robots_tag(values: Iterable[str]) -> Dict[str, Dict[Key, str]]:
    """Разбирает значения X-Robots-Tag.

    Каждое значение делится по запятой.  Часть вида ``googlebot: noindex``
    сохраняется под именем агента, остальные части получают порядковый номер.
    Повторяющиеся правила отбрасываются.

    Args:
        values: все значения заголовка X-Robots-Tag из ответа.

    Returns:
        ``{"X-Robots-Tag": {...}}`` или ``{}``, если правил нет.

    Пример:
    ```python
    parse_x_robots_tag(["noindex, nofollow", "googlebot: noarchive"])
    # {'X-Robots-Tag': {0: 'noindex', 1: 'nofollow', 'googlebot': 'noarchive'}}
    ```
    """
    rules: Dict[Key, str] = {}
    positional: set[str] = set()
    index = 0
    for value in values:
        for part in (p.strip() for p in value.split(",")):
            if not part:
                continue
            agent, sep, rule = part.partition(":")
            agent = agent.strip()
            if sep and agent and agent.lower() not in _VALUED_RULES:
                rule = rule.strip()
                if agent in rules:
                    if rule not in rules[agent].split(", "):
                        rules[agent] = f"{rules[agent]}, {rule}"
                else:
                    rules[agent] = rule
                continue
            if part in positional:
                continue
            positional.add(part)
            rules[index] = part
            index += 1
    return {X_ROBOTS_TAG: rules} if rules else {}
