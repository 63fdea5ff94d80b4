"""
Generic traversal of settings documents.

Settings documents are dataclasses whose fields are declared with
fields.setting(), fields.block() or fields.part(). The helpers here read
that metadata to convert documents to and from JSON, build request
bodies containing only declared settings, merge read responses, and
flatten documents for schema declaration and drift detection.
"""

from dataclasses import fields, replace
from typing import Any, Dict, Iterator, Set, Tuple

from platsync.exceptions import ValidationError
from .fields import (
    BOOL,
    INT,
    STRING,
    STRING_LIST,
    from_raw,
    is_present,
    merge_list,
    merge_scalar,
    to_raw,
)

REDACTED = "***"

_KIND_TYPES = {
    STRING: (str,),
    INT: (int,),
    BOOL: (bool,),
}


def _wire_name(f) -> str:
    return f.metadata.get("wire") or f.name


def setting_names(cls) -> Set[str]:
    """Names accepted at this level of the document, with parts flattened"""
    names = set()
    for f in fields(cls):
        if "part" in f.metadata:
            names |= setting_names(f.metadata["part"])
        else:
            names.add(f.name)
    return names


def _check_kind(raw: Any, kind: str, path: str) -> None:
    if raw is None:
        return
    if kind == STRING_LIST:
        if not isinstance(raw, list) or not all(isinstance(item, str) for item in raw):
            raise ValidationError(f"{path} must be a list of strings")
        return
    expected = _KIND_TYPES[kind]
    # bool is an int subclass; reject it where an int is expected
    if not isinstance(raw, expected) or (kind == INT and isinstance(raw, bool)):
        raise ValidationError(f"{path} must be of type {kind}, got {type(raw).__name__}")


def document_from_dict(cls, data: Dict[str, Any], path: str = "", strict: bool = True):
    """
    Build a settings document from a JSON object.

    Missing keys and null values become ABSENT; [] for list settings
    becomes EMPTY.

    Raises:
        ValidationError: wrong value types or, with strict, unknown keys
    """
    if not isinstance(data, dict):
        raise ValidationError(f"{path or cls.__name__} must be an object")

    kwargs = {}
    for f in fields(cls):
        meta = f.metadata
        if "part" in meta:
            kwargs[f.name] = document_from_dict(meta["part"], data, path, strict=False)
            continue

        field_path = f"{path}.{f.name}" if path else f.name
        raw = data.get(f.name)
        if "block" in meta:
            kwargs[f.name] = None if raw is None else document_from_dict(meta["block"], raw, field_path)
        else:
            _check_kind(raw, meta["kind"], field_path)
            kwargs[f.name] = from_raw(raw, is_list=meta["kind"] == STRING_LIST)

    if strict:
        unknown = sorted(set(data) - setting_names(cls))
        if unknown:
            raise ValidationError(f"Unknown settings in {path or cls.__name__}: {', '.join(unknown)}")

    return cls(**kwargs)


def document_to_dict(doc, redact: bool = False) -> Dict[str, Any]:
    """JSON view of a document; absent settings and blocks are omitted"""
    out: Dict[str, Any] = {}
    for f in fields(doc):
        value = getattr(doc, f.name)
        if "part" in f.metadata:
            out.update(document_to_dict(value, redact))
        elif "block" in f.metadata:
            if value is not None:
                out[f.name] = document_to_dict(value, redact)
        elif is_present(value):
            out[f.name] = REDACTED if redact and f.metadata["write_only"] else to_raw(value)
    return out


def build_wire_body(doc) -> Dict[str, Any]:
    """Request body holding only declared settings, in wire names"""
    body: Dict[str, Any] = {}
    for f in fields(doc):
        meta = f.metadata
        value = getattr(doc, f.name)

        if "part" in meta:
            body.update(build_wire_body(value))
        elif "block" in meta:
            if value is None:
                continue
            nested = build_wire_body(value)
            if meta.get("prefix"):
                body.update({f"{meta['prefix']}_{k}": v for k, v in nested.items()})
            elif nested:
                body[_wire_name(f)] = nested
        elif is_present(value):
            raw = to_raw(value)
            converter = meta.get("to_wire")
            body[_wire_name(f)] = converter(raw) if converter else raw
    return body


def _block_payload(f, payload: Dict[str, Any]) -> Dict[str, Any]:
    prefix = f.metadata.get("prefix")
    if prefix:
        head = f"{prefix}_"
        return {k[len(head):]: v for k, v in payload.items() if k.startswith(head)}
    nested = payload.get(_wire_name(f))
    return nested if isinstance(nested, dict) else {}


def _block_configured(block_cls, block_payload: Dict[str, Any]) -> bool:
    """On import, whether a remote block is worth tracking"""
    if "enabled" in setting_names(block_cls):
        return block_payload.get("enabled") is True
    return any(v is not None for v in block_payload.values())


def merge_wire(doc, payload: Dict[str, Any], populate: bool = False):
    """
    Return a copy of doc with a read response merged in.

    Absent blocks stay absent unless populate is set and the remote has
    them configured.
    """
    updates: Dict[str, Any] = {}
    for f in fields(doc):
        meta = f.metadata
        current = getattr(doc, f.name)

        if "part" in meta:
            updates[f.name] = merge_wire(current, payload, populate)
        elif "block" in meta:
            block_payload = _block_payload(f, payload)
            if current is None:
                if not (populate and _block_configured(meta["block"], block_payload)):
                    continue
                current = meta["block"]()
            updates[f.name] = merge_wire(current, block_payload, populate)
        else:
            remote = payload.get(_wire_name(f))
            converter = meta.get("from_wire")
            if remote is not None and converter:
                remote = converter(remote)
            if meta["kind"] == STRING_LIST:
                updates[f.name] = merge_list(current, remote, populate)
            else:
                updates[f.name] = merge_scalar(
                    current, remote, write_only=meta["write_only"], populate=populate
                )
    return replace(doc, **updates)


def iter_declared(doc, prefix: str = "") -> Iterator[Tuple[str, Any, bool]]:
    """Yield (dotted path, raw value, write_only) for every declared setting"""
    for f in fields(doc):
        value = getattr(doc, f.name)
        if "part" in f.metadata:
            yield from iter_declared(value, prefix)
        elif "block" in f.metadata:
            if value is not None:
                yield from iter_declared(value, f"{prefix}{f.name}.")
        elif is_present(value):
            yield f"{prefix}{f.name}", to_raw(value), f.metadata["write_only"]


def schema_attributes(cls) -> Dict[str, Dict[str, Any]]:
    """
    Flattened attribute schema for a document class.

    Composed parts are merged into one attribute map; blocks become
    nested object attributes.
    """
    attrs: Dict[str, Dict[str, Any]] = {}
    for f in fields(cls):
        meta = f.metadata
        if "part" in meta:
            attrs.update(schema_attributes(meta["part"]))
        elif "block" in meta:
            attrs[f.name] = {
                "type": "object",
                "optional": True,
                "description": meta["description"],
                "attributes": schema_attributes(meta["block"]),
            }
        else:
            attrs[f.name] = {
                "type": meta["kind"],
                "optional": True,
                "sensitive": meta["write_only"],
                "description": meta["description"],
            }
    return attrs
