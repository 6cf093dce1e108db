"""Dependency classification between two documents.

A document depends on another when it extends something the other one
defines, or when it uses a type or directive the other one defines. The
two relations are kept as separate predicates; ``is_dependent_on`` only
reports whether either holds.
"""

from gqlcompose.references import DocumentProfile


def has_extensions_for(dependent: DocumentProfile, dependency: DocumentProfile) -> bool:
    """Whether ``dependent`` extends something ``dependency`` defines.

    Any schema extension depends on any schema definition regardless of
    names, since neither carries one. Other extensions match definitions of
    the same category and name.
    """
    if dependent.extends_schema and dependency.defines_schema:
        return True

    return any(
        target in dependency.definition_targets
        for target in dependent.extension_targets
        if target[1] is not None
    )


def has_types_for(dependent: DocumentProfile, dependency: DocumentProfile) -> bool:
    """Whether ``dependent`` uses a directive or type that ``dependency`` defines.

    Only definitions count; a type that ``dependency`` merely extends does
    not satisfy a reference.
    """
    references = dependent.references
    if not references.directive_names.isdisjoint(dependency.defined_directive_names):
        return True
    return not references.type_names.isdisjoint(dependency.defined_type_names)


def is_dependent_on(dependent: DocumentProfile, dependency: DocumentProfile) -> bool:
    """Whether ``dependent`` must be merged after ``dependency``.

    A document never depends on itself; documents are compared by name.
    """
    if dependent.name == dependency.name:
        return False
    return has_extensions_for(dependent, dependency) or has_types_for(dependent, dependency)
