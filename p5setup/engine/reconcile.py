"""Reconciliation of a library ``<script>`` reference inside an HTML document.

A call makes exactly one placement decision, taken from this list in
order:

1. an existing recognized reference is rewritten in place;
2. otherwise a marker comment in ``<head>`` is replaced by a new script;
3. otherwise a new script becomes the first child of ``<head>``;
4. otherwise (no ``<head>`` at all) the markup is returned untouched.

The engine holds no state between calls.
"""

from __future__ import annotations

import logging

from .document import DocumentAdapter
from .patterns import build_catalog
from .search import find_marker_anchor, find_script_anchor
from .types import DEFAULT_LIBRARY, DeliveryMode, LibraryDescriptor, ReconciliationOutcome, Strategy
from .urls import build_script_url

logger = logging.getLogger(__name__)


def reconcile(
    markup: str,
    version: str,
    mode: DeliveryMode | str,
    library: LibraryDescriptor = DEFAULT_LIBRARY,
) -> ReconciliationOutcome:
    """Point ``markup`` at ``version`` of ``library`` delivered via ``mode``."""

    delivery = DeliveryMode(mode)
    document = DocumentAdapter(markup)

    existing = find_script_anchor(document, build_catalog(library))
    if existing is not None:
        reference = build_script_url(version, delivery, existing.preferences(delivery), library)
        existing.node['src'] = reference
        return _outcome(document, Strategy.UPDATED_EXISTING, reference)

    marker = find_marker_anchor(document, library.marker)
    if marker is not None:
        reference = build_script_url(version, delivery, library=library)
        document.replace(marker.node, document.new_script(reference))
        return _outcome(document, Strategy.REPLACED_MARKER, reference)

    head = document.head
    if head is not None:
        reference = build_script_url(version, delivery, library=library)
        document.insert_first(head, document.new_script(reference))
        return _outcome(document, Strategy.INSERTED_NEW, reference)

    logger.debug("No script, marker or <head> found; leaving markup untouched")
    return ReconciliationOutcome(document=markup, changed=False, strategy=Strategy.NO_ANCHOR_AVAILABLE)


def _outcome(document: DocumentAdapter, strategy: Strategy, reference: str) -> ReconciliationOutcome:
    logger.debug("Reconciled script reference via %s: %s", strategy.value, reference)
    return ReconciliationOutcome(
        document=document.serialize(),
        changed=True,
        strategy=strategy,
        reference=reference,
    )
