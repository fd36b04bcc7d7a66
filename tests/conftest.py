"""Shared response payload builders."""
from __future__ import annotations

from collections.abc import Callable
from typing import Any

import orjson
import pytest


def _build_payload(
    *,
    docs: list[dict[str, Any]] | None = None,
    params: dict[str, Any] | None = None,
    num_found: int | None = None,
    start: int = 0,
    facet_fields: dict[str, list[Any]] | None = None,
    highlighting: dict[str, Any] | None = None,
) -> dict[str, Any]:
    docs = docs if docs is not None else []
    return {
        "responseHeader": {
            "status": 0,
            "QTime": 3,
            "params": params if params is not None else {"q": "*:*", "rows": "10"},
        },
        "response": {
            "numFound": num_found if num_found is not None else len(docs),
            "start": start,
            "maxScore": 1.0,
            "docs": docs,
        },
        "facet_counts": {
            "facet_queries": {},
            "facet_fields": facet_fields if facet_fields is not None else {},
        },
        "highlighting": highlighting if highlighting is not None else {},
    }


ANNOTATION_DOCS: list[dict[str, Any]] = [
    {
        "id": "GO:0022008_UniProtKB:P12345",
        "bioentity": "UniProtKB:P12345",
        "bioentity_label": "ABC1",
        "annotation_class": "GO:0022008",
        "annotation_class_label": "neurogenesis",
        "assigned_by": "UniProt",
        "isa_partof_closure": ["GO:0022008", "GO:0007399", "GO:0008150"],
        "isa_partof_closure_label": ["neurogenesis", "nervous system development", "biological_process"],
        "isa_partof_closure_map": orjson.dumps({
            "GO:0022008": "neurogenesis",
            "GO:0007399": "nervous system development",
        }).decode(),
        "isa_partof_closure_closure_map": orjson.dumps({
            "GO:0008150": "biological_process",
        }).decode(),
    },
    {
        "id": "GO:0007399_MGI:MGI:97490",
        "bioentity": "MGI:MGI:97490",
        "bioentity_label": "Pax6",
        "annotation_class": "GO:0007399",
        "annotation_class_label": "nervous system development",
        "assigned_by": "MGI",
        "taxon_closure": ["NCBITaxon:10090"],
        "taxon_closure_label": ["Mus musculus"],
    },
    {
        "id": "GO:0005634_UniProtKB:Q99999",
        "bioentity": "UniProtKB:Q99999",
        "annotation_class": "GO:0005634",
        "annotation_class_label": "nucleus",
        "assigned_by": "GO_Central",
        "regulates_closure": ["GO:0005634", "GO:0043231"],
        "regulates_closure_label": ["nucleus", "intracellular membrane-bounded organelle"],
        "regulates_closure_list_map": orjson.dumps({
            "GO:0043231": "intracellular membrane-bounded organelle",
        }).decode(),
    },
]


@pytest.fixture()
def make_payload() -> Callable[..., dict[str, Any]]:
    """Factory for minimal successful payloads; keyword args override sections."""
    return _build_payload


@pytest.fixture()
def annotation_docs() -> list[dict[str, Any]]:
    return [dict(d) for d in ANNOTATION_DOCS]


@pytest.fixture()
def annotation_payload(annotation_docs: list[dict[str, Any]]) -> dict[str, Any]:
    return _build_payload(
        docs=annotation_docs,
        params={
            "q": "neurogenesis",
            "rows": "2",
            "packet": "4",
            "callback_type": "reset",
            "fq": ['-assigned_by:"UniProt"', "taxon_closure:NCBITaxon:9606"],
        },
        num_found=7,
        start=2,
        facet_fields={
            "assigned_by": ["UniProt", 120, "MGI", 80, "GO_Central", 3],
            "aspect": ["P", 150, "C", 53],
        },
        highlighting={
            "GO:0022008_UniProtKB:P12345": {
                "annotation_class_label_searchable": ["<em>neurogenesis</em>"],
                "bioentity_label": ["ABC1"],
            },
            "GO:0007399_MGI:MGI:97490": {
                "annotation_class_label": [
                    "<em>nervous</em> tissue",
                    "<em>nervous</em> system development",
                ],
            },
        },
    )
