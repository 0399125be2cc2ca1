import dataclasses

import pytest

from batch_replace.config import Config
from batch_replace.exceptions import StoreError
from batch_replace.models import SUBJECT_FIELDS, TranslatableString


class ScriptedConsole:
    """Replays canned answers and records everything shown to the operator."""

    def __init__(self, answers=()):
        self.answers = list(answers)
        self.lines = []
        self.prompts = []

    def print_line(self, message):
        self.lines.append(str(message))

    def prompt_line(self, message):
        self.prompts.append(str(message))
        if not self.answers:
            raise AssertionError(f"unexpected prompt: {message}")
        return self.answers.pop(0)

    @property
    def output(self):
        return "\n".join(self.lines + self.prompts)


class MemoryStore:
    regex_supported = True

    def __init__(self, records, languages=("en",), fail_on=None):
        self.records = {r.key: r for r in records}
        self.languages = list(languages)
        self.fail_on = fail_on
        self.persisted = []
        self.checked_out = []
        self.checked_in = []

    def list_languages(self):
        return self.languages

    def list_components(self, lang):
        return sorted({r.component for r in self.records.values() if r.lang == lang})

    def checkout(self, lang):
        self.checked_out.append(lang)

    def fetch_matching_strings(self, lang, components, matcher):
        wanted = set(components)
        found = [
            dataclasses.replace(r)
            for r in self.records.values()
            if r.lang == lang and r.component in wanted
            and any(matcher.matches_raw(getattr(r, name)) for name in SUBJECT_FIELDS)
        ]
        return sorted(found, key=lambda r: (r.component, r.stringid))

    def persist_local(self, record):
        if record.stringid == self.fail_on:
            raise StoreError(f"write failed for {record.stringid}")
        self.records[record.key].local = record.local
        self.persisted.append(record.stringid)

    def checkin(self, lang):
        self.checked_in.append(lang)

    def local(self, component, stringid, lang="en"):
        return self.records[(lang, component, stringid)].local


def make_record(stringid, local=None, master=None, original=None, component="core", lang="en"):
    return TranslatableString(
        lang=lang,
        component=component,
        stringid=stringid,
        original=original,
        master=master,
        local=local,
    )


@pytest.fixture
def record():
    return make_record


@pytest.fixture
def console():
    def _make(*answers):
        return ScriptedConsole(answers)
    return _make


@pytest.fixture
def store():
    def _make(*records, **kwargs):
        return MemoryStore(records, **kwargs)
    return _make


@pytest.fixture
def config(tmp_path):
    def _make(**kwargs):
        return Config(store_dir=str(tmp_path / "strings"), default_lang="en", **kwargs)
    return _make
