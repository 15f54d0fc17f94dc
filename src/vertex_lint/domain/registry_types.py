from typing import TypedDict


class RuleRegistryEntry(TypedDict, total=False):
    description: str
    category: str
    fixable: bool
    messages: dict[str, str]
