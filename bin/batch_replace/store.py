"""Record store backed by per-component YAML files.

Layout::

    <store_dir>/<lang>/<component>.yaml   stringid -> {original, master, local}
    <store_dir>/<lang>/.checkout.yaml     working copy while checked out

``checkout`` copies every component into the working copy, ``persist_local``
rewrites the working copy after each accepted record, and ``checkin`` writes
the local values back to the component files. A working copy left behind by
an aborted session is resumed on the next checkout.
"""

from __future__ import annotations

import dataclasses
import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Protocol, Tuple, Union

import yaml

from batch_replace.exceptions import StoreError
from batch_replace.matcher import Matcher
from batch_replace.models import SUBJECT_FIELDS, TranslatableString

logger = logging.getLogger(__name__)

CHECKOUT_FILE = ".checkout.yaml"


class StringStore(Protocol):
    """Protocol for record store operations"""

    regex_supported: bool

    def list_languages(self) -> List[str]:
        ...

    def list_components(self, lang: str) -> List[str]:
        ...

    def checkout(self, lang: str) -> None:
        ...

    def fetch_matching_strings(
        self, lang: str, components: Iterable[str], matcher: Matcher
    ) -> List[TranslatableString]:
        ...

    def persist_local(self, record: TranslatableString) -> None:
        ...

    def checkin(self, lang: str) -> None:
        ...


def _load_yaml(path: Path) -> Any:
    try:
        with open(path, encoding='utf-8') as f:
            return yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise StoreError(f"Failed to read {path}: {e}") from e


def _dump_yaml(path: Path, data: Any) -> None:
    tmp_path = path.with_name(path.name + '.tmp')
    try:
        with open(tmp_path, 'w', encoding='utf-8') as f:
            yaml.dump(data, f, default_flow_style=False, allow_unicode=True, sort_keys=False)
        os.replace(tmp_path, path)
    except OSError as e:
        raise StoreError(f"Failed to write {path}: {e}") from e


class YamlStringStore:
    """Handles all string store operations"""

    regex_supported = True

    def __init__(self, store_dir: Union[str, Path]):
        self.store_dir = Path(store_dir)
        self._lang: Optional[str] = None
        self._records: Dict[Tuple[str, str, str], TranslatableString] = {}

    def list_languages(self) -> List[str]:
        if not self.store_dir.is_dir():
            return []
        return sorted(p.name for p in self.store_dir.iterdir() if p.is_dir() and not p.name.startswith('.'))

    def list_components(self, lang: str) -> List[str]:
        lang_dir = self.store_dir / lang
        if not lang_dir.is_dir():
            return []
        return sorted(p.stem for p in lang_dir.glob('*.yaml') if not p.name.startswith('.'))

    def checkout(self, lang: str) -> None:
        lang_dir = self.store_dir / lang
        if not lang_dir.is_dir():
            raise StoreError(f"Language not found in store: {lang}")

        checkout_path = lang_dir / CHECKOUT_FILE
        if checkout_path.exists():
            logger.info(f"Resuming pending checkout: {checkout_path}")
            rows = _load_yaml(checkout_path) or []
            records = [self._row_to_record(lang, row) for row in rows]
        else:
            records = []
            for component in self.list_components(lang):
                records.extend(self._load_component(lang, component))

        self._lang = lang
        self._records = {r.key: r for r in records}
        self._write_checkout()
        logger.info(f"Checked out {len(self._records)} strings for {lang}")

    def fetch_matching_strings(
        self, lang: str, components: Iterable[str], matcher: Matcher
    ) -> List[TranslatableString]:
        """Records with a raw match in any field, ordered by component then stringid."""
        self._require_checkout(lang)
        wanted = set(components)
        found = [
            dataclasses.replace(record)
            for record in self._records.values()
            if record.component in wanted
            and any(matcher.matches_raw(getattr(record, name)) for name in SUBJECT_FIELDS)
        ]
        found.sort(key=lambda r: (r.component, r.stringid))
        return found

    def persist_local(self, record: TranslatableString) -> None:
        self._require_checkout(record.lang)
        stored = self._records.get(record.key)
        if stored is None:
            raise StoreError(f"Unknown string: {record.component}/{record.stringid}")
        stored.local = record.local
        self._write_checkout()

    def checkin(self, lang: str) -> None:
        self._require_checkout(lang)
        lang_dir = self.store_dir / lang

        by_component: Dict[str, List[TranslatableString]] = {}
        for record in self._records.values():
            by_component.setdefault(record.component, []).append(record)

        for component, records in sorted(by_component.items()):
            path = lang_dir / f"{component}.yaml"
            data = (_load_yaml(path) if path.exists() else None) or {}
            for record in records:
                row = data.get(record.stringid)
                if not isinstance(row, dict):
                    row = {}
                row.update({
                    'original': record.original,
                    'master': record.master,
                    'local': record.local,
                })
                data[record.stringid] = row
            _dump_yaml(path, data)

        try:
            (lang_dir / CHECKOUT_FILE).unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            raise StoreError(f"Failed to remove working copy for {lang}: {e}") from e
        logger.info(f"Checked in {len(self._records)} strings for {lang}")
        self._lang = None
        self._records = {}

    def _require_checkout(self, lang: str) -> None:
        if self._lang != lang:
            raise StoreError(f"Language {lang} is not checked out")

    def _load_component(self, lang: str, component: str) -> List[TranslatableString]:
        data = _load_yaml(self.store_dir / lang / f"{component}.yaml") or {}
        if not isinstance(data, dict):
            raise StoreError(f"Invalid component file for {lang}/{component}")
        records = []
        for stringid, row in data.items():
            if not isinstance(row, dict):
                row = {'master': row}
            records.append(self._row_to_record(lang, {'component': component, 'stringid': stringid, **row}))
        return records

    @staticmethod
    def _row_to_record(lang: str, row: Dict[str, Any]) -> TranslatableString:
        def _text(value: Any) -> Optional[str]:
            return None if value is None else str(value)

        return TranslatableString(
            lang=lang,
            component=str(row['component']),
            stringid=str(row['stringid']),
            original=_text(row.get('original')),
            master=_text(row.get('master')),
            local=_text(row.get('local')),
        )

    def _write_checkout(self) -> None:
        rows = [
            {
                'component': r.component,
                'stringid': r.stringid,
                'original': r.original,
                'master': r.master,
                'local': r.local,
            }
            for r in sorted(self._records.values(), key=lambda r: (r.component, r.stringid))
        ]
        _dump_yaml(self.store_dir / self._lang / CHECKOUT_FILE, rows)
