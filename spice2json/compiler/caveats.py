"""Caveat definition mapping."""

from spice2json.compiler.comments import get_metadata_comments
from spice2json.domain.compiled import CaveatDefinition
from spice2json.domain.document import Caveat


def map_caveat(caveat: CaveatDefinition) -> Caveat:
    """
    Map a caveat definition.

    Each declared parameter becomes one `name -> type name` entry; keys are
    sorted so the exported mapping is stable across runs.

    Example:
        `caveat ip_allowed(ip ipaddress, limit int)` maps to
        {"name": "ip_allowed", "parameters": {"ip": "ipaddress", "limit": "int"}}
    """
    parameters = {
        name: reference.type_name for name, reference in sorted(caveat.parameter_types.items())
    }

    return Caveat(
        name=caveat.name,
        parameters=parameters,
        comment=get_metadata_comments(caveat.metadata),
    )
