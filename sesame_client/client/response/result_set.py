"""Sesame Result Set Model

Typed, immutable representation of a tabular SPARQL result: an ordered list
of variables and an ordered list of rows mapping variables to optional
binding values.
"""

from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator
from rdflib import BNode, Literal, URIRef
from rdflib.term import Identifier


class BindingKind(str, Enum):
    URI = 'uri'
    LITERAL = 'literal'
    BNODE = 'bnode'


class BindingValue(BaseModel):
    """An RDF term bound to a variable in one result row."""
    model_config = ConfigDict(frozen=True)

    kind: BindingKind = Field(
        ...,
        description="Term kind (uri, literal or bnode)"
    )
    value: str = Field(
        ...,
        description="Lexical value"
    )
    language: Optional[str] = Field(
        None,
        description="Language tag, literals only"
    )
    datatype: Optional[str] = Field(
        None,
        description="Datatype URI, literals only"
    )

    @model_validator(mode='after')
    def _check_term(self) -> 'BindingValue':
        if self.kind is not BindingKind.LITERAL:
            if self.language is not None or self.datatype is not None:
                raise ValueError(f"{self.kind.value} values cannot carry a language or datatype")
        elif self.language is not None and self.datatype is not None:
            raise ValueError("a literal carries either a language or a datatype, not both")
        return self

    @classmethod
    def uri(cls, value: str) -> 'BindingValue':
        return cls(kind=BindingKind.URI, value=value)

    @classmethod
    def literal(cls, value: str, language: Optional[str] = None,
                datatype: Optional[str] = None) -> 'BindingValue':
        return cls(kind=BindingKind.LITERAL, value=value, language=language, datatype=datatype)

    @classmethod
    def bnode(cls, value: str) -> 'BindingValue':
        return cls(kind=BindingKind.BNODE, value=value)

    @property
    def is_uri(self) -> bool:
        return self.kind is BindingKind.URI

    @property
    def is_literal(self) -> bool:
        return self.kind is BindingKind.LITERAL

    @property
    def is_bnode(self) -> bool:
        return self.kind is BindingKind.BNODE

    @classmethod
    def from_rdflib(cls, term: Identifier) -> 'BindingValue':
        """Build a binding value from an rdflib URIRef, BNode or Literal."""
        if isinstance(term, URIRef):
            return cls.uri(str(term))
        if isinstance(term, BNode):
            return cls.bnode(str(term))
        if isinstance(term, Literal):
            return cls.literal(
                str(term),
                language=term.language,
                datatype=str(term.datatype) if term.datatype and not term.language else None,
            )
        raise TypeError(f"Cannot bind rdflib term of type {type(term).__name__}")

    def to_rdflib(self) -> Identifier:
        """Convert to the equivalent rdflib term."""
        if self.kind is BindingKind.URI:
            return URIRef(self.value)
        if self.kind is BindingKind.BNODE:
            return BNode(self.value)
        return Literal(
            self.value,
            lang=self.language,
            datatype=URIRef(self.datatype) if self.datatype else None,
        )

    def __str__(self) -> str:
        if self.kind is BindingKind.URI:
            return f"<{self.value}>"
        if self.kind is BindingKind.BNODE:
            return f"_:{self.value}"
        if self.language:
            return f'"{self.value}"@{self.language}'
        if self.datatype:
            return f'"{self.value}"^^<{self.datatype}>'
        return f'"{self.value}"'


class Row(Mapping):
    """
    One result row.

    Maps every declared variable to its BindingValue, or to None when the
    variable is unbound in this row. Looking up a variable that was never
    declared raises KeyError.
    """

    __slots__ = ('_variables', '_values')

    def __init__(self, variables: Tuple[str, ...], values: Dict[str, BindingValue]):
        self._variables = variables
        self._values = dict(values)

    def __getitem__(self, variable: str) -> Optional[BindingValue]:
        if variable not in self._variables:
            raise KeyError(variable)
        return self._values.get(variable)

    def __iter__(self) -> Iterator[str]:
        return iter(self._variables)

    def __len__(self) -> int:
        return len(self._variables)

    def is_bound(self, variable: str) -> bool:
        return self[variable] is not None

    def bound(self) -> Dict[str, BindingValue]:
        """Return only the bound variables of this row."""
        return {name: self._values[name] for name in self._variables if name in self._values}

    def __eq__(self, other) -> bool:
        if isinstance(other, Row):
            return self._variables == other._variables and self._values == other._values
        return super().__eq__(other)

    def __hash__(self):
        return hash((self._variables, tuple(sorted(self._values.items(), key=lambda item: item[0]))))

    def __repr__(self) -> str:
        return f"Row({self.bound()!r})"


class ResultSet(Sequence):
    """
    Fully decoded tabular result.

    Variables are fixed at construction; rows keep the order the server
    returned them in. The set supports iteration, re-iteration, len() and
    indexing and cannot be modified.
    """

    __slots__ = ('_variables', '_rows')

    def __init__(self, variables: Iterable[str], rows: Iterable[Dict[str, BindingValue]] = ()):
        declared: List[str] = []
        for name in variables:
            if name not in declared:
                declared.append(name)
        self._variables = tuple(declared)

        built = []
        for index, values in enumerate(rows):
            if isinstance(values, Row):
                values = values.bound()
            unknown = [name for name in values if name not in self._variables]
            if unknown:
                raise ValueError(f"Row {index} binds undeclared variables: {', '.join(unknown)}")
            built.append(Row(self._variables, {k: v for k, v in values.items() if v is not None}))
        self._rows = tuple(built)

    @property
    def variables(self) -> Tuple[str, ...]:
        return self._variables

    @property
    def rows(self) -> Tuple[Row, ...]:
        return self._rows

    def __getitem__(self, index):
        return self._rows[index]

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self._rows)

    def column(self, variable: str) -> List[Optional[BindingValue]]:
        """Return the values of one variable across all rows."""
        if variable not in self._variables:
            raise KeyError(variable)
        return [row[variable] for row in self._rows]

    def __eq__(self, other) -> bool:
        if not isinstance(other, ResultSet):
            return NotImplemented
        return self._variables == other._variables and self._rows == other._rows

    __hash__ = None

    def __repr__(self) -> str:
        return f"ResultSet(variables={list(self._variables)!r}, rows={len(self._rows)})"
