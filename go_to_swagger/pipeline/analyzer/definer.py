"""
Definition builder: drives full resolution of reachable types.

Starting from an operation's parameter or response (or any Definition),
every embedded type is merged into its host and every non-primitive member
type is resolved, stored and defined in turn. Both steps run at most once
per Definition, which keeps cyclic and diamond shaped type graphs finite.
"""

from __future__ import annotations

import logging
from typing import assert_never

from ..errors import UnresolvedTypeError
from .ir_nodes import CollectionMember, Definition, MappingMember, Member, ScalarMember
from .resolver import TypeResolver
from .store import DefinitionStore
from .units import UnitGraph

logger = logging.getLogger(__name__)


class DefinitionBuilder:
    """Resolves, stores and flattens Definitions on demand."""

    def __init__(self, graph: UnitGraph, store: DefinitionStore, resolver: TypeResolver):
        self.graph = graph
        self.store = store
        self.resolver = resolver

    def find(self, referring_path: str, type_ref: str) -> Definition | None:
        """Return the stored Definition of a type, resolving and storing it on a miss."""
        definition = self.store.lookup(self.graph, referring_path, type_ref)
        if definition is not None:
            return definition

        definition = self.resolver.resolve(referring_path, type_ref)
        if definition is None:
            return None

        self.store.add(definition)
        return definition

    def flatten(self, host: Definition) -> None:
        """
        Merge the members of every embedded type into the host.

        Members the host already declares are never replaced. Each embedded
        Definition is flattened before its members are copied, so embedding
        is transitive.

        Raises:
            UnresolvedTypeError: If an embedded type cannot be found
        """
        if host.flattened:
            return
        host.flattened = True

        for type_ref in host.embedded_types:
            embedded = self.find(host.unit_path, type_ref)
            if embedded is None:
                raise UnresolvedTypeError(type_ref, referring_path=host.canonical_name())

            self.flatten(embedded)

            for name, member in embedded.members.items():
                if name not in host.members:
                    host.members[name] = member

    def define_all(self, definition: Definition) -> None:
        """
        Resolve everything a Definition reaches.

        Raises:
            UnresolvedTypeError: If a member type cannot be found
        """
        if definition.defined:
            return
        definition.defined = True

        self.flatten(definition)

        # Embedded Definitions are stored too; members the host shadows
        # still need their targets.
        for type_ref in definition.embedded_types:
            self.define_all(self.find(definition.unit_path, type_ref))

        for name, member in list(definition.members.items()):
            self.define_member(member, member.origin_path or definition.unit_path, name)

    def define_member(self, member: Member, referring_path: str, field_name: str = "") -> None:
        """
        Resolve the types a member refers to and record where they live.

        Args:
            member: Member to define
            referring_path: Package in which the member's type text is written
            field_name: Name used in error messages

        Raises:
            UnresolvedTypeError: If a referenced type cannot be found
        """
        field_name = field_name or member.name

        if isinstance(member, ScalarMember):
            if member.is_primitive:
                return

            target = self.find(referring_path, member.type_ref)
            if target is None:
                raise UnresolvedTypeError(member.type_ref, field_name, referring_path)

            member.unit_name = target.unit_name
            member.unit_path = target.unit_path
            self.define_all(target)
        elif isinstance(member, CollectionMember):
            self.define_member(member.element, referring_path, field_name)
        elif isinstance(member, MappingMember):
            self.define_member(member.value, referring_path, field_name)
            self.define_member(member.key, referring_path, field_name)
        else:
            assert_never(member)
