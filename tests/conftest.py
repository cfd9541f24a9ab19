# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
import pytest

from sortable_table.logging.init import reset_logging
from sortable_table.models.dataset import Dataset


@pytest.fixture(autouse=True)
def _fresh_logging():
    # the package handler binds sys.stdout at setup time; capsys swaps it per test
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_html() -> str:
    return """<!DOCTYPE html>
<html><head><title>Romans</title></head><body>
<table class="sortable" id="novels">
  <tr><th>Titre</th><th>Année</th><th class="nosort">Notes</th><th></th></tr>
  <tr class="highlight"><td>Le Rouge et le Noir</td><td>1830</td><td>a</td><td>x</td></tr>
  <tr style="color: red"><td>L’Étranger</td><td data-sort="1942">juin 1942</td><td>b</td><td>y</td></tr>
  <tr><td>Germinal</td><td>1885</td><td>c</td><td>z</td></tr>
</table>
<table class="sortable" id="solo"><tr><th>Seul</th></tr></table>
<table id="plain"><tr><th>Plain</th></tr><tr><td>1</td></tr><tr><td>2</td></tr></table>
</body></html>
"""


@pytest.fixture()
def sample_config_yaml() -> str:
    return """normalizer:
  extra_folding:
    "ø": "o"
  articles: ["d'", "de ", "le ", "les ", "la ", "l'", "the "]
painter:
  bands:
    - {class: even, modulus: 2, remainder: 1}
    - {class: odd, modulus: 2, remainder: 0}
markup:
  table_class: sortme
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "sortable.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def novels() -> Dataset:
    return Dataset.from_records(
        ["Titre", "Année", "Pages"],
        [
            ["Le Rouge et le Noir", "1830", 576],
            ["L’Étranger", "1942", 159],
            ["Germinal", "1885", 591],
            ["Les Misérables", "1862", 1488],
            ["Œdipe roi", "-429", 80],
        ],
    )


@pytest.fixture()
def years() -> Dataset:
    return Dataset.from_records(
        ["Année"],
        [["1999"], ["2000"], ["2005"], ["2010"], ["2011"]],
    )
