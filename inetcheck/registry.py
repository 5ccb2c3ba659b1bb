from __future__ import annotations

from pathlib import Path

import yaml

from inetcheck.models import Target, TargetsFile


def load_targets_file(path: Path) -> TargetsFile:
    if not path.exists():
        raise FileNotFoundError(f"Missing targets file at {path}")

    data = yaml.safe_load(path.read_text()) or {}
    tf = TargetsFile.model_validate(data)

    # Ensure unique URIs
    seen = set()
    for t in tf.targets:
        uri = str(t.uri)
        if uri in seen:
            raise ValueError(f"Duplicate target uri: {uri}")
        seen.add(uri)

    return tf


def apply_defaults(tf: TargetsFile) -> list[Target]:
    """Fill in `defaults.timeout_s` for targets that do not set their own."""
    d = tf.defaults
    out: list[Target] = []
    for t in tf.targets:
        if t.timeout_s is None and d.timeout_s is not None:
            t = t.model_copy(update={"timeout_s": d.timeout_s})
        out.append(t)
    return out


def load_targets(path: Path | str) -> list[Target]:
    return apply_defaults(load_targets_file(Path(path)))
