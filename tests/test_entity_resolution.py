import pytest  # type: ignore[import-not-found]

from transnet.data.models import AttributeKind, EntitySpec, TranslationRecord
from transnet.graph.entities import EntityResolver, resolve_entities


def build_specs(*keys: str):
    return [EntitySpec.parse(key) for key in keys]


def test_resolver_follows_spec_order():
    record = TranslationRecord(author="Jane Doe", translator="John Roe", publisher="Penguin")
    entities = resolve_entities(record, build_specs("translator", "author", "publisher"))

    assert [entity.identity for entity in entities] == [
        "translator:John Roe",
        "author:Jane Doe",
        "publisher:Penguin",
    ]
    assert [entity.group for entity in entities] == ["translator", "author", "publisher"]


def test_resolver_skips_placeholders_and_blank_values():
    record = TranslationRecord(author="Unknown", translator="N/A", publisher="   ", city="")
    entities = resolve_entities(record, build_specs("author", "translator", "publisher", "city"))
    assert entities == []


def test_placeholder_check_is_case_sensitive():
    record = TranslationRecord(author="unknown", translator="n/a")
    entities = resolve_entities(record, build_specs("author", "translator"))
    assert [entity.name for entity in entities] == ["unknown", "n/a"]


def test_padded_placeholder_is_kept_as_an_entity():
    record = TranslationRecord(author=" Unknown ", translator="Unknown", publisher=" N/A")
    entities = resolve_entities(record, build_specs("author", "translator", "publisher"))

    assert [entity.identity for entity in entities] == ["author:Unknown", "publisher:N/A"]
    assert entities[0].name == " Unknown "


def test_custom_fields_are_read_from_extra_map():
    record = TranslationRecord(author="Jane Doe", extra={"Genre": "Poetry"})
    resolver = EntityResolver(build_specs("author", "custom:Genre", "custom:Missing"))
    entities = resolver.resolve(record)

    assert len(entities) == 2
    assert entities[1].identity == "custom:Genre:Poetry"
    assert entities[1].group == "custom:Genre"


def test_identity_normalises_whitespace_but_name_is_kept():
    record = TranslationRecord(author="Jane   Doe")
    (entity,) = resolve_entities(record, build_specs("author"))
    assert entity.identity == "author:Jane Doe"
    assert entity.name == "Jane   Doe"


def test_entity_spec_parse_accepts_aliases_and_rejects_unknown_keys():
    assert EntitySpec.parse("authorName").kind is AttributeKind.AUTHOR
    assert EntitySpec.parse("translatorName").attribute_key == "translator"
    assert EntitySpec.parse("custom:Apoios").attribute_key == "custom:Apoios"
    with pytest.raises(ValueError):
        EntitySpec.parse("favourite_colour")
    with pytest.raises(ValueError):
        EntitySpec.parse("custom")


def test_record_from_mapping_tolerates_loose_payloads():
    record = TranslationRecord.from_mapping(
        {
            "id": "dglab-1",
            "author": {"name": "José Eduardo Agualusa", "gender": "Male"},
            "translatorName": "Michael Kegler",
            "publisher": None,
            "publicationYear": "not-a-year",
            "customMetadata": {"Genre": "Modernism", "sourceCoord": [13.2, -8.8], "Rank": 3},
        }
    )

    assert record.record_id == "dglab-1"
    assert record.author == "José Eduardo Agualusa"
    assert record.translator == "Michael Kegler"
    assert record.publisher == ""
    assert record.publication_year is None
    assert record.extra == {"Genre": "Modernism", "Rank": "3"}
