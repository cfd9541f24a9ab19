from __future__ import annotations
import pandas as pd
import pytest
from pathlib import Path
from sortable_table.tabular.reader import TabularReadError, frame_to_dataset, read_tabular_file


def _make_excel(tmp_path: Path, name: str, sheets: dict[str, list[list[object]]]) -> Path:
    p = tmp_path / name
    with pd.ExcelWriter(p, engine="openpyxl") as writer:
        for sheet, rows in sheets.items():
            df = pd.DataFrame(rows)
            df.to_excel(writer, sheet_name=sheet, header=False, index=False)
    return p


def test_read_csv_keeps_locale_text(temp_workdir: Path):
    csv = temp_workdir / "data" / "values.csv"
    csv.write_text('Nom,Valeur\nb,"1 234,5"\nNA,2\n', encoding="utf-8")

    frame = read_tabular_file(csv)

    assert list(frame.columns) == ["Nom", "Valeur"]
    assert frame.iloc[0]["Valeur"] == "1 234,5"
    assert frame.iloc[1]["Nom"] == "NA"


@pytest.mark.parametrize("suffix", [".tsv", ".tab", ".txt"])
def test_read_tab_separated(temp_workdir: Path, suffix: str):
    path = temp_workdir / "data" / f"values{suffix}"
    path.write_text("a\tb\n1,5\tx\n", encoding="utf-8")

    frame = read_tabular_file(path)

    assert list(frame.columns) == ["a", "b"]
    assert frame.iloc[0]["a"] == "1,5"


def test_read_excel_first_and_named_sheet(temp_workdir: Path):
    excel = _make_excel(
        temp_workdir, "books.xlsx",
        {
            "Livres": [["Titre", "Pages"], ["Germinal", 591], ["Nana", 512]],
            "Autres": [["Nom"], ["x"]],
        },
    )

    first = read_tabular_file(excel)
    assert list(first.columns) == ["Titre", "Pages"]
    assert len(first) == 2

    other = read_tabular_file(excel, sheet="Autres")
    assert list(other.columns) == ["Nom"]


def test_read_excel_unknown_sheet(temp_workdir: Path):
    excel = _make_excel(temp_workdir, "books.xlsx", {"Livres": [["Titre"], ["x"]]})
    with pytest.raises(TabularReadError):
        read_tabular_file(excel, sheet="Nope")


def test_unsupported_and_missing_files(temp_workdir: Path):
    with pytest.raises(TabularReadError) as e:
        read_tabular_file(temp_workdir / "data.json")
    assert "unsupported" in str(e.value)

    with pytest.raises(TabularReadError) as e:
        read_tabular_file(temp_workdir / "missing.csv")
    assert "not found" in str(e.value)


def test_frame_to_dataset_keeps_numbers_literal(temp_workdir: Path):
    excel = _make_excel(
        temp_workdir, "books.xlsx",
        {"Livres": [["Titre", "Pages"], ["Germinal", 591], ["Nana", None]]},
    )
    dataset = frame_to_dataset(read_tabular_file(excel), excluded=[0])

    assert [c.label for c in dataset.columns] == ["Titre", "Pages"]
    assert dataset.columns[0].excluded is True
    assert dataset.rows[0].cells[1].literal == 591
    assert dataset.rows[1].cells[1].text == ""
    assert dataset.rows[1].cells[1].literal is None
