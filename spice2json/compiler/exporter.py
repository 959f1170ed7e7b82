"""
Schema exporter.

Turns a compiled schema into the exported Document:
- Every object definition, in declaration order
- Every caveat definition, in declaration order

Export is all-or-nothing: if any definition fails to map, no document is
returned and the error names the definition.
"""

import logging
import time

from spice2json.compiler.caveats import map_caveat
from spice2json.compiler.definitions import RelationClassifier, get_relation_kind, map_definition
from spice2json.core.config import settings
from spice2json.core.errors import SchemaExportError, Spice2JsonError
from spice2json.core.observability import generate_export_id, metrics, set_export_id
from spice2json.domain.compiled import CompiledSchema
from spice2json.domain.document import Caveat, Definition, Document

logger = logging.getLogger(__name__)


def export_schema(
    schema: CompiledSchema, classify: RelationClassifier = get_relation_kind
) -> Document:
    """
    Export a compiled schema as a Document.

    Args:
        schema: Compiled schema (object and caveat definitions)
        classify: Relation kind lookup, passed through to the definition mapper

    Returns:
        Document with definitions and caveats in source order

    Raises:
        SchemaExportError: If a definition cannot be mapped (cause chained)

    Example Output (JSON form):
        {
            "definitions": [
                {
                    "name": "document",
                    "namespace": "acme",
                    "relations": [{"name": "viewer", "types": [{"type": "user"}]}],
                    "permissions": [
                        {
                            "name": "view",
                            "userSet": {"operation": "union", "children": [{"relation": "viewer"}]}
                        }
                    ]
                }
            ]
        }
    """
    set_export_id(generate_export_id())
    start_time = time.perf_counter()
    logger.info(
        "Starting export of %d definitions and %d caveats",
        len(schema.object_definitions),
        len(schema.caveat_definitions),
    )

    try:
        definitions: list[Definition] = []
        for definition in schema.object_definitions:
            try:
                definitions.append(map_definition(definition, classify))
            except Exception as e:
                # Wrap mapping errors with the definition that caused them
                raise SchemaExportError(
                    f'failed to export "{definition.name}": {e}',
                    details={
                        "definition": definition.name,
                        "error": str(e),
                        **(e.details if isinstance(e, Spice2JsonError) else {}),
                    },
                ) from e

        caveats: list[Caveat] = [map_caveat(caveat) for caveat in schema.caveat_definitions]

        document = Document(definitions=tuple(definitions), caveats=tuple(caveats))

    except SchemaExportError as e:
        duration = time.perf_counter() - start_time
        logger.error("Schema export failed: %s", e.message, extra={"details": e.details})
        _record_export_metrics("error", duration, 0)
        raise

    duration = time.perf_counter() - start_time
    logger.info(
        "Exported schema: %d definitions, %d caveats, duration=%.4fs",
        len(document.definitions),
        len(document.caveats),
        duration,
    )
    _record_export_metrics("success", duration, len(document.definitions))

    return document


def _record_export_metrics(status: str, duration: float, definition_count: int) -> None:
    """
    Record export metrics to Prometheus.

    Metrics failures are logged and ignored so they never fail an export.

    Args:
        status: "success" or "error"
        duration: Export duration in seconds
        definition_count: Number of definitions exported
    """
    if not settings.observability_metrics_enabled:
        return

    try:
        metrics.schema_exports_total.labels(status=status).inc()
        metrics.schema_export_duration_seconds.observe(duration)

        if status == "success":
            metrics.schema_export_definitions_count.observe(definition_count)
    except Exception:
        logger.debug("Failed to record export metrics", exc_info=True)
