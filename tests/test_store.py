"""YamlStringStore unit tests."""
import pytest
import yaml

from batch_replace.exceptions import StoreError
from batch_replace.matcher import LiteralMatcher, RegexMatcher
from batch_replace.store import CHECKOUT_FILE, YamlStringStore


def write_component(store_dir, lang, component, rows):
    lang_dir = store_dir / lang
    lang_dir.mkdir(parents=True, exist_ok=True)
    with open(lang_dir / f"{component}.yaml", "w", encoding="utf-8") as f:
        yaml.dump(rows, f, allow_unicode=True, sort_keys=False)


def read_yaml(path):
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f)


@pytest.fixture
def store_dir(tmp_path):
    root = tmp_path / "strings"
    write_component(root, "en", "quiz", {
        "quizname": {"original": "Quiz", "master": "Quiz", "local": None},
        "attempts": {"original": "Attempts per course", "master": "Attempts per course", "local": None},
    })
    write_component(root, "en", "core", {
        "coursename": {"original": "Course name", "master": "Course name", "local": "Subject name"},
        "courses": {"original": "Courses", "master": "My courses", "local": None},
    })
    write_component(root, "nl", "core", {
        "courses": {"original": "Courses", "master": "Cursussen", "local": None},
    })
    return root


class TestListing:
    def test_languages_and_components(self, store_dir):
        store = YamlStringStore(store_dir)
        assert store.list_languages() == ["en", "nl"]
        assert store.list_components("en") == ["core", "quiz"]
        assert store.list_components("xx") == []

    def test_missing_store_dir(self, tmp_path):
        assert YamlStringStore(tmp_path / "nope").list_languages() == []

    def test_working_copy_is_not_a_component(self, store_dir):
        store = YamlStringStore(store_dir)
        store.checkout("en")
        assert (store_dir / "en" / CHECKOUT_FILE).exists()
        assert store.list_components("en") == ["core", "quiz"]


class TestFetch:
    def test_ordered_by_component_then_stringid(self, store_dir):
        store = YamlStringStore(store_dir)
        store.checkout("en")
        found = store.fetch_matching_strings("en", ["core", "quiz"], LiteralMatcher("ourse"))
        assert [(r.component, r.stringid) for r in found] == [
            ("core", "coursename"),
            ("core", "courses"),
            ("quiz", "attempts"),
        ]

    def test_component_filter_and_regex(self, store_dir):
        store = YamlStringStore(store_dir)
        store.checkout("en")
        found = store.fetch_matching_strings("en", ["core"], RegexMatcher(r"^My "))
        assert [r.stringid for r in found] == ["courses"]

    def test_returns_copies(self, store_dir):
        store = YamlStringStore(store_dir)
        store.checkout("en")
        rec = store.fetch_matching_strings("en", ["quiz"], LiteralMatcher("Quiz"))[0]
        rec.local = "changed"
        again = store.fetch_matching_strings("en", ["quiz"], LiteralMatcher("Quiz"))[0]
        assert again.local is None

    def test_requires_checkout(self, store_dir):
        with pytest.raises(StoreError):
            YamlStringStore(store_dir).fetch_matching_strings("en", ["core"], LiteralMatcher("x"))


class TestCheckoutCheckin:
    def test_persist_writes_working_copy(self, store_dir):
        store = YamlStringStore(store_dir)
        store.checkout("en")
        rec = store.fetch_matching_strings("en", ["quiz"], LiteralMatcher("course"))[0]
        rec.local = "Attempts per subject"
        store.persist_local(rec)

        rows = read_yaml(store_dir / "en" / CHECKOUT_FILE)
        row = next(r for r in rows if r["stringid"] == "attempts")
        assert row["local"] == "Attempts per subject"
        # component files are untouched until checkin
        assert read_yaml(store_dir / "en" / "quiz.yaml")["attempts"]["local"] is None

    def test_checkin_writes_local_only(self, store_dir):
        store = YamlStringStore(store_dir)
        store.checkout("en")
        rec = store.fetch_matching_strings("en", ["quiz"], LiteralMatcher("course"))[0]
        rec.local = "Attempts per subject"
        rec.master = "ignored"
        store.persist_local(rec)
        store.checkin("en")

        data = read_yaml(store_dir / "en" / "quiz.yaml")
        assert data["attempts"] == {
            "original": "Attempts per course",
            "master": "Attempts per course",
            "local": "Attempts per subject",
        }
        assert data["quizname"]["local"] is None
        assert read_yaml(store_dir / "en" / "core.yaml")["coursename"]["local"] == "Subject name"
        assert not (store_dir / "en" / CHECKOUT_FILE).exists()

    def test_pending_checkout_is_resumed(self, store_dir):
        store = YamlStringStore(store_dir)
        store.checkout("en")
        rec = store.fetch_matching_strings("en", ["quiz"], LiteralMatcher("course"))[0]
        rec.local = "Attempts per subject"
        store.persist_local(rec)

        resumed = YamlStringStore(store_dir)
        resumed.checkout("en")
        again = resumed.fetch_matching_strings("en", ["quiz"], LiteralMatcher("subject"))
        assert [r.local for r in again] == ["Attempts per subject"]

    def test_unicode_round_trip(self, store_dir):
        write_component(store_dir, "ko", "core", {"course": {"original": "Course", "master": "강좌", "local": None}})
        store = YamlStringStore(store_dir)
        store.checkout("ko")
        rec = store.fetch_matching_strings("ko", ["core"], LiteralMatcher("강좌"))[0]
        rec.local = "과목"
        store.persist_local(rec)
        store.checkin("ko")
        assert read_yaml(store_dir / "ko" / "core.yaml")["course"]["local"] == "과목"

    def test_scalar_row_is_master(self, store_dir):
        write_component(store_dir, "de", "core", {"course": "Kurs"})
        store = YamlStringStore(store_dir)
        store.checkout("de")
        rec = store.fetch_matching_strings("de", ["core"], LiteralMatcher("Kurs"))[0]
        assert (rec.original, rec.master, rec.local) == (None, "Kurs", None)

    def test_unknown_language(self, store_dir):
        with pytest.raises(StoreError):
            YamlStringStore(store_dir).checkout("xx")

    def test_persist_unknown_record(self, store_dir, record):
        store = YamlStringStore(store_dir)
        store.checkout("en")
        with pytest.raises(StoreError):
            store.persist_local(record("missing", local="x"))

    def test_checkin_other_language(self, store_dir):
        store = YamlStringStore(store_dir)
        store.checkout("en")
        with pytest.raises(StoreError):
            store.checkin("nl")
