import pathlib
import shutil

import pytest

from tstranslate import parser

DATA = pathlib.Path(__file__).parent / "data"


@pytest.fixture
def data_dir() -> pathlib.Path:
    return DATA


@pytest.fixture
def indonesian():
    return parser.load(DATA / "VirtualBox_id.ts")


@pytest.fixture
def english():
    return parser.load(DATA / "VirtualBox_en.ts")


@pytest.fixture
def workspace(tmp_path):
    """A config folder and a translation folder populated with the test catalogs."""
    config = tmp_path / "config"
    config.mkdir()
    (config / "languages.cfg").write_text(
        '"Languages"\n{\n\t"en"\t"English"\n\t"id"\t"Indonesian"\n'
        '\t"de"\t"German"\n\t"fr"\t"French"\n}\n',
        encoding="utf-8",
    )
    (config / "config.yml").write_text(
        "logging:\n  level: DEBUG\n  format: '%(levelname)s %(message)s'\n  datefmt: '%H:%M:%S'\n",
        encoding="utf-8",
    )
    nls = tmp_path / "nls"
    nls.mkdir()
    for file in DATA.glob("*.ts"):
        shutil.copy(file, nls / file.name)
    return tmp_path
