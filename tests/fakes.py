"""
In-memory search engine double.
FakeSearchClient speaks the subset of the AsyncElasticsearch API the store
uses and evaluates the query DSL the query builder emits.
"""

import copy
import uuid
from typing import Any

from elastic_transport import ApiResponseMeta, HttpHeaders, NodeConfig
from elasticsearch import BadRequestError
from elasticsearch import ConnectionError as ESConnectionError
from elasticsearch import ConnectionTimeout

TEST_INDEX = "test-items"
WRITE_CALLS = ("index", "update", "delete")


def api_meta(status: int) -> ApiResponseMeta:
    return ApiResponseMeta(
        status=status,
        http_version="1.1",
        headers=HttpHeaders(),
        duration=0.0,
        node=NodeConfig("http", "localhost", 9200),
    )


def already_exists_error() -> BadRequestError:
    return BadRequestError(
        message="resource_already_exists_exception",
        meta=api_meta(400),
        body={"error": {"type": "resource_already_exists_exception"}, "status": 400},
    )


def _field_values(source: dict[str, Any], field: str) -> list[Any]:
    name = field.split("^")[0]
    if name.endswith(".keyword"):
        name = name[: -len(".keyword")]
    value = source.get(name)
    if value is None:
        return []
    return value if isinstance(value, list) else [value]


def evaluate(clause: dict[str, Any], doc_id: str, source: dict[str, Any]) -> tuple[bool, float]:
    """(matches, score) for the clause kinds the query builder emits."""
    kind, body = next(iter(clause.items()))
    if kind == "match_all":
        return True, 1.0
    if kind == "multi_match":
        text = " ".join(str(v) for f in body["fields"] for v in _field_values(source, f)).lower()
        matched = sum(1 for token in body["query"].lower().split() if token in text)
        return matched > 0, float(matched)
    if kind == "term":
        field, expected = next(iter(body.items()))
        boost = 1.0
        if isinstance(expected, dict):
            boost = expected.get("boost", 1.0)
            expected = expected["value"]
        return expected in _field_values(source, field), boost
    if kind == "terms":
        field, expected = next((k, v) for k, v in body.items() if k != "boost")
        return bool(set(expected) & set(_field_values(source, field))), body.get("boost", 1.0)
    if kind == "range":
        field, bounds = next(iter(body.items()))
        ok = any(
            ("gte" not in bounds or v >= bounds["gte"]) and ("lte" not in bounds or v <= bounds["lte"])
            for v in _field_values(source, field)
        )
        return ok, 0.0
    if kind == "ids":
        return doc_id in body["values"], 0.0
    if kind == "bool":
        score = 0.0
        for c in body.get("must", []):
            ok, s = evaluate(c, doc_id, source)
            if not ok:
                return False, 0.0
            score += s
        if not all(evaluate(c, doc_id, source)[0] for c in body.get("filter", [])):
            return False, 0.0
        if any(evaluate(c, doc_id, source)[0] for c in body.get("must_not", [])):
            return False, 0.0
        should = body.get("should", [])
        matched = 0
        for c in should:
            ok, s = evaluate(c, doc_id, source)
            if ok:
                matched += 1
                score += s
        msm = body.get("minimum_should_match")
        if msm is None:
            msm = 1 if should and not body.get("must") and not body.get("filter") else 0
        if matched < msm:
            return False, 0.0
        return True, score
    raise ValueError(f"unsupported clause: {kind}")


class FakeIndices:
    def __init__(self, engine: "FakeSearchClient"):
        self.engine = engine

    async def exists(self, index: str) -> bool:
        self.engine.check()
        self.engine.calls.append(("indices.exists", index))
        return index in self.engine.index_meta

    async def create(self, index: str, mappings: dict | None = None, settings: dict | None = None):
        self.engine.check()
        self.engine.calls.append(("indices.create", index))
        if index in self.engine.index_meta:
            raise already_exists_error()
        self.engine.index_meta[index] = {"mappings": mappings, "settings": settings}
        self.engine.docs.setdefault(index, {})
        return {"acknowledged": True, "index": index}

    async def delete(self, index: str):
        self.engine.calls.append(("indices.delete", index))
        self.engine.index_meta.pop(index, None)
        self.engine.docs.pop(index, None)
        return {"acknowledged": True}


class FakeCluster:
    def __init__(self, engine: "FakeSearchClient"):
        self.engine = engine

    async def health(self):
        self.engine.check()
        return {"status": "green"}


class FakeSearchClient:
    """In-memory stand-in for AsyncElasticsearch."""

    def __init__(self):
        self.docs: dict[str, dict[str, dict[str, Any]]] = {}
        self.index_meta: dict[str, dict] = {}
        self.calls: list[tuple] = []
        self.down = False
        self.timing_out = False
        self.indices = FakeIndices(self)
        self.cluster = FakeCluster(self)

    def check(self) -> None:
        if self.down:
            raise ESConnectionError("Connection refused")
        if self.timing_out:
            raise ConnectionTimeout("Connection timed out")

    def writes(self) -> list[tuple]:
        return [c for c in self.calls if c[0] in WRITE_CALLS]

    def options(self, **kwargs):
        return self

    async def index(self, index: str, document: dict, id: str | None = None, refresh: str | None = None):
        self.check()
        doc_id = id or uuid.uuid4().hex
        self.calls.append(("index", doc_id, refresh))
        self.docs.setdefault(index, {})[doc_id] = copy.deepcopy(document)
        return {"_index": index, "_id": doc_id, "result": "created"}

    async def get(self, index: str, id: str):
        self.check()
        self.calls.append(("get", id))
        source = self.docs.get(index, {}).get(id)
        if source is None:
            return {"_index": index, "_id": id, "found": False}
        return {"_index": index, "_id": id, "found": True, "_source": copy.deepcopy(source)}

    async def update(self, index: str, id: str, doc: dict, refresh: str | None = None):
        self.check()
        self.calls.append(("update", id, refresh))
        self.docs[index][id].update(copy.deepcopy(doc))
        return {"_index": index, "_id": id, "result": "updated"}

    async def delete(self, index: str, id: str, refresh: str | None = None):
        self.check()
        self.calls.append(("delete", id, refresh))
        del self.docs[index][id]
        return {"_index": index, "_id": id, "result": "deleted"}

    async def search(
        self,
        index: str,
        query: dict | None = None,
        sort: list | None = None,
        from_: int = 0,
        size: int = 10,
        suggest: dict | None = None,
    ):
        self.check()
        self.calls.append(("search", index, query, size))
        docs = self.docs.get(index, {})
        matched = []
        for doc_id, source in docs.items():
            ok, score = evaluate(query or {"match_all": {}}, doc_id, source)
            if ok:
                matched.append((score, doc_id, source))
        # Stable multi-key sort, missing values last in either direction
        for sort_spec in reversed(sort or [{"_score": {"order": "desc"}}]):
            field, options = next(iter(sort_spec.items()))

            def value(item, field=field):
                return item[0] if field == "_score" else item[2].get(field)

            present = [item for item in matched if value(item) is not None]
            absent = [item for item in matched if value(item) is None]
            present.sort(key=value, reverse=options.get("order", "desc") == "desc")
            matched = present + absent
        response: dict[str, Any] = {
            "took": 1,
            "hits": {
                "total": {"value": len(matched), "relation": "eq"},
                "hits": [
                    {"_index": index, "_id": doc_id, "_score": score, "_source": copy.deepcopy(source)}
                    for score, doc_id, source in matched[from_ : from_ + size]
                ],
            },
        }
        if suggest:
            response["suggest"] = {name: [self._complete(docs, clause)] for name, clause in suggest.items()}
        return response

    def _complete(self, docs: dict[str, dict], clause: dict) -> dict:
        prefix = clause["prefix"]
        options = clause["completion"]
        field = options["field"].split(".")[0]
        texts: list[str] = []
        for source in docs.values():
            text = source.get(field)
            if not text or not text.lower().startswith(prefix.lower()):
                continue
            if options.get("skip_duplicates") and text in texts:
                continue
            texts.append(text)
        texts = sorted(texts)[: options.get("size", 5)]
        return {"text": prefix, "offset": 0, "length": len(prefix), "options": [{"text": t} for t in texts]}

    async def close(self):
        pass


