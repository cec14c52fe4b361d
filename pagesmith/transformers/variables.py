# pagesmith/transformers/variables.py
"""
Transformer that substitutes build variables.

Replaces:
    <$site_name/>                 → Example Site
    <a title="$site_name">        → <a title="Example Site">

A ``$``-prefixed tag becomes a single text node and its children are dropped.
On any other element only the ``$``-prefixed attribute values change.
"""

from typing import Dict, List, Mapping

from ..exceptions import UnknownVariableError
from ..markup import VARIABLE_SIGIL
from ..nodes import Attrs, Element, Node, Text
from ..walker import Context, Transformer


class VariableReplacer(Transformer):
    def __init__(self, variables: Mapping[str, str]):
        self.variables: Dict[str, str] = dict(variables)

    def describe(self) -> str:
        variables = ", ".join(f"{k!r} = {v!r}" for k, v in self.variables.items())
        return f"VariableReplacer({variables})"

    def matches(self, tag_name: str, attrs: Attrs, ctx: Context) -> bool:
        return tag_name.startswith(VARIABLE_SIGIL) or any(
            v.startswith(VARIABLE_SIGIL) for _, v in attrs
        )

    def _resolve(self, value: str) -> str:
        if not value.startswith(VARIABLE_SIGIL):
            return value
        try:
            return self.variables[value[len(VARIABLE_SIGIL):]]
        except KeyError:
            raise UnknownVariableError(value) from None

    def replace(
        self, tag_name: str, attrs: Attrs, children: List[Node], ctx: Context
    ) -> List[Node]:
        if tag_name.startswith(VARIABLE_SIGIL):
            return [Text(self._resolve(tag_name))]

        new_attrs = [(k, self._resolve(v)) for k, v in attrs]
        return [Element(tag_name, new_attrs, children)]
