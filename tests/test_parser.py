import pytest

from tstranslate import parser
from tstranslate.classes import CatalogError, Location


def test_load_reads_catalog_attributes(indonesian):
    assert indonesian.version == "2.0"
    assert indonesian.language == "id"
    assert indonesian.sourcelanguage is None
    assert [x.name for x in indonesian.contexts] == [
        "QIMessageBox",
        "UIMachineSettingsAudio",
        "UIMediaManager",
        "UIMessageCenter",
        "UIWizard",
        "VBoxGlobal",
    ]


def test_entities_are_decoded(indonesian):
    message = indonesian.context("QIMessageBox").messages[2]
    assert message.source == "&Details (%1 of %2)"
    assert message.translation == "&Rincian (%1 dari %2)"
    assert message.is_finished


def test_translation_types(indonesian):
    audio = indonesian.context("UIMachineSettingsAudio").messages
    assert audio[0].source == "Enable &Audio"
    assert audio[0].is_unfinished
    assert audio[0].translation == ""
    assert audio[1].type is None
    assert audio[2].is_obsolete
    assert audio[2].translation == "&Pengendali Audio:"


def test_comment_and_locations(indonesian):
    ok = indonesian.context("QIMessageBox").messages[0]
    assert ok.comment == ""
    assert ok.locations == [Location("../src/extensions/QIMessageBox.cpp", 87)]

    name = indonesian.context("UIMediaManager").messages[1]
    assert name.key == ("Name", "attachment")


def test_numerus_forms(english):
    message = english.context("VBoxGlobal").messages[0]
    assert message.numerus
    assert message.numerus_forms == ["%n year", "%n years"]
    assert message.translation == "%n year"
    assert message.is_finished


def test_missing_translation_element():
    catalog = parser.loads(
        "<TS version='2.0'><context><name>A</name>"
        "<message><source>Hello</source></message></context></TS>"
    )
    message = catalog.context("A").messages[0]
    assert message.translation == ""
    assert message.type is None
    assert not message.is_finished


def test_optional_fields_and_context_comment():
    catalog = parser.loads(
        "<TS version='2.0'><context><name>A</name><comment>about A</comment>"
        "<message><location filename='a.cpp' line='x'/>"
        "<source>New</source><oldsource>Old</oldsource>"
        "<extracomment>for translators</extracomment>"
        "<translatorcomment>checked</translatorcomment>"
        "<translation>Baru</translation></message></context></TS>"
    )
    context = catalog.context("A")
    assert context.comment == "about A"
    message = context.messages[0]
    assert message.oldsource == "Old"
    assert message.oldcomment is None
    assert message.extracomment == "for translators"
    assert message.translatorcomment == "checked"
    assert message.locations == [Location("a.cpp", None)]


def test_malformed_xml_raises():
    with pytest.raises(CatalogError, match="Malformed"):
        parser.loads("<TS><context>")


def test_wrong_root_raises():
    with pytest.raises(CatalogError, match='"xliff"'):
        parser.loads("<xliff/>")


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(CatalogError, match="Cannot read"):
        parser.load(tmp_path / "nope.ts")


def test_parse_catalogs_keeps_broken_files(data_dir):
    files = parser.parse_catalogs(data_dir, "de")
    assert len(files) == 1
    assert files[0].filename == "VirtualBox_de.ts"
    assert files[0].stem == "VirtualBox"
    assert files[0].catalog is None
    assert files[0].error


def test_parse_catalogs_matches_language_suffix(data_dir):
    files = parser.parse_catalogs(data_dir, "id")
    assert [x.filename for x in files] == ["VirtualBox_id.ts"]
    assert files[0].catalog.language == "id"


def test_byte_elements_are_decoded():
    catalog = parser.loads(
        "<TS version='2.0'><context><name>A</name><message>"
        "<source>a<byte value='x1'/>b</source>"
        "<translation>c<byte value='11'/>d<byte value='bogus'/></translation>"
        "</message></context></TS>"
    )
    message = catalog.context("A").messages[0]
    assert message.source == "a\x01b"
    assert message.translation == "c\x0bd"
