"""Placement and preference tests for the reconciliation engine."""

from __future__ import annotations

from p5setup.engine.reconcile import reconcile
from p5setup.engine.types import LibraryDescriptor, Strategy

from .conftest import MARKER, comments, head_children, make_document, script_sources

JSDELIVR_190 = "https://cdn.jsdelivr.net/npm/p5@1.9.0/lib/p5.js"


def test_updates_existing_jsdelivr_reference():
    library = LibraryDescriptor(package="lib", stem="lib", dist_dir="dist")
    markup = make_document(
        head='<script src="https://cdn.jsdelivr.net/npm/lib@2.1.0/dist/lib.min.js"></script>'
    )

    outcome = reconcile(markup, "2.0.5", "cdn", library)

    assert outcome.strategy is Strategy.UPDATED_EXISTING
    assert outcome.changed is True
    assert outcome.reference == "https://cdn.jsdelivr.net/npm/lib@2.0.5/dist/lib.min.js"
    assert script_sources(outcome.document) == [outcome.reference]


def test_cdnjs_minified_preference_survives_version_change():
    markup = make_document(
        head='<script src="https://cdnjs.cloudflare.com/ajax/libs/p5.js/1.4.0/p5.min.js"></script>'
    )

    outcome = reconcile(markup, "1.9.4", "cdn")

    assert outcome.reference == "https://cdnjs.cloudflare.com/ajax/libs/p5.js/1.9.4/p5.min.js"


def test_switch_to_local_drops_provider():
    markup = make_document(head='<script src="https://unpkg.com/p5@1.9.0/lib/p5.js"></script>')

    outcome = reconcile(markup, "2.0.5", "local")

    assert outcome.strategy is Strategy.UPDATED_EXISTING
    assert script_sources(outcome.document) == ["lib/p5.js"]
    assert "unpkg" not in outcome.document
    assert "2.0.5" not in outcome.document


def test_switch_from_local_to_cdn_keeps_minified_and_uses_canonical_provider():
    markup = make_document(head='<script src="lib/p5.min.js"></script>')

    outcome = reconcile(markup, "2.0.5", "cdn")

    assert outcome.reference == "https://cdn.jsdelivr.net/npm/p5@2.0.5/lib/p5.min.js"


def test_other_attributes_are_untouched():
    markup = make_document(
        head=f'<script defer data-role="engine" src="{JSDELIVR_190}" crossorigin="anonymous"></script>'
    )

    outcome = reconcile(markup, "2.0.5", "cdn")

    assert 'data-role="engine"' in outcome.document
    assert 'crossorigin="anonymous"' in outcome.document
    assert "defer" in outcome.document
    assert script_sources(outcome.document) == ["https://cdn.jsdelivr.net/npm/p5@2.0.5/lib/p5.js"]


def test_reconcile_is_idempotent():
    markup = make_document(
        head='<meta charset="utf-8"><script src="https://unpkg.com/p5@1.0.0/lib/p5.min.js"></script>',
        body="<script src=\"sketch.js\"></script>",
    )

    first = reconcile(markup, "2.0.5", "cdn")
    second = reconcile(first.document, "2.0.5", "cdn")

    assert second.strategy is Strategy.UPDATED_EXISTING
    assert second.changed is True
    assert second.document == first.document


def test_only_the_reference_value_differs():
    before = make_document(head=f'<link rel="stylesheet" href="style.css"><script src="{JSDELIVR_190}"></script>')
    already = before.replace("p5@1.9.0", "p5@2.0.5")

    assert reconcile(before, "2.0.5", "cdn").document == reconcile(already, "2.0.5", "cdn").document


def test_local_mode_is_idempotent():
    markup = make_document(head=MARKER)

    first = reconcile(markup, "1.9.0", "local")
    second = reconcile(first.document, "1.9.0", "local")

    assert first.strategy is Strategy.REPLACED_MARKER
    assert second.strategy is Strategy.UPDATED_EXISTING
    assert second.document == first.document


def test_first_reference_in_document_order_wins():
    markup = make_document(
        head=f'<script src="{JSDELIVR_190}"></script>',
        body='<script src="https://unpkg.com/p5@1.0.0/lib/p5.min.js"></script>',
    )

    outcome = reconcile(markup, "2.0.5", "cdn")

    assert script_sources(outcome.document) == [
        "https://cdn.jsdelivr.net/npm/p5@2.0.5/lib/p5.js",
        "https://unpkg.com/p5@1.0.0/lib/p5.min.js",
    ]


def test_unrecognized_scripts_are_skipped():
    markup = make_document(
        head='<script>window.ready = true;</script><script src="sketch.js"></script>'
        f'<script src="{JSDELIVR_190}"></script>'
    )

    outcome = reconcile(markup, "2.0.5", "cdn")

    assert outcome.strategy is Strategy.UPDATED_EXISTING
    assert script_sources(outcome.document) == ["sketch.js", "https://cdn.jsdelivr.net/npm/p5@2.0.5/lib/p5.js"]


def test_existing_reference_takes_precedence_over_marker():
    markup = make_document(head=f'{MARKER}<script src="{JSDELIVR_190}"></script>')

    outcome = reconcile(markup, "2.0.5", "cdn")

    assert outcome.strategy is Strategy.UPDATED_EXISTING
    assert comments(outcome.document) == ["P5JS_SCRIPT_TAG"]
    assert script_sources(outcome.document) == ["https://cdn.jsdelivr.net/npm/p5@2.0.5/lib/p5.js"]


def test_marker_is_replaced_without_prior_preferences():
    markup = make_document(head=f'<meta charset="utf-8">{MARKER}<title>Sketch</title>')

    outcome = reconcile(markup, "2.0.5", "cdn")

    assert outcome.strategy is Strategy.REPLACED_MARKER
    assert comments(outcome.document) == []
    assert [tag.name for tag in head_children(outcome.document)] == ["meta", "script", "title"]
    assert script_sources(outcome.document) == ["https://cdn.jsdelivr.net/npm/p5@2.0.5/lib/p5.js"]


def test_marker_whitespace_is_trimmed():
    markup = make_document(head="<!--  P5JS_SCRIPT_TAG\n -->")

    outcome = reconcile(markup, "2.0.5", "local")

    assert outcome.strategy is Strategy.REPLACED_MARKER
    assert script_sources(outcome.document) == ["lib/p5.js"]


def test_marker_match_is_case_sensitive():
    markup = make_document(head='<!-- p5js_script_tag --><meta charset="utf-8">')

    outcome = reconcile(markup, "2.0.5", "cdn")

    assert outcome.strategy is Strategy.INSERTED_NEW
    assert comments(outcome.document) == ["p5js_script_tag"]


def test_marker_outside_head_is_ignored():
    markup = make_document(head='<meta charset="utf-8">', body=f"{MARKER}<main></main>")

    outcome = reconcile(markup, "2.0.5", "cdn")

    assert outcome.strategy is Strategy.INSERTED_NEW
    assert comments(outcome.document) == ["P5JS_SCRIPT_TAG"]


def test_new_script_becomes_first_child_of_head():
    markup = make_document(head='<meta charset="utf-8"><link rel="stylesheet" href="style.css">')

    outcome = reconcile(markup, "2.0.5", "cdn")

    assert outcome.strategy is Strategy.INSERTED_NEW
    assert outcome.changed is True
    children = head_children(outcome.document)
    assert [tag.name for tag in children] == ["script", "meta", "link"]
    assert children[0]["src"] == "https://cdn.jsdelivr.net/npm/p5@2.0.5/lib/p5.js"


def test_new_script_is_added_to_empty_head():
    outcome = reconcile(make_document(head=""), "1.9.0", "local")

    assert outcome.strategy is Strategy.INSERTED_NEW
    assert [tag.name for tag in head_children(outcome.document)] == ["script"]


def test_document_without_head_is_returned_untouched():
    markup = "<html><body><p>No metadata here</p></body></html>"

    outcome = reconcile(markup, "2.0.5", "cdn")

    assert outcome.strategy is Strategy.NO_ANCHOR_AVAILABLE
    assert outcome.changed is False
    assert outcome.reference is None
    assert outcome.document == markup
    assert outcome.markup == markup


def test_fragment_without_head_is_returned_untouched():
    markup = "<p>Just a fragment</p>"

    outcome = reconcile(markup, "2.0.5", "local")

    assert outcome.strategy is Strategy.NO_ANCHOR_AVAILABLE
    assert outcome.document == markup


def test_serialized_document_starts_with_doctype():
    outcome = reconcile(make_document(head=MARKER), "2.0.5", "cdn")

    assert outcome.document.startswith("<!DOCTYPE html>\n<html>")
