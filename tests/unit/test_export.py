import csv
from datetime import date
from pathlib import Path

from chargesites.common.models import RawRecord
from chargesites.pipeline.classify_sites import classify_record
from chargesites.pipeline.export import EXPORT_HEADERS, export_row, write_sites_csv

AS_OF = date(2025, 6, 1)


def _site():
    return classify_record(
        RawRecord(
            row_index=3,
            construction_status="Réalisé",
            affair="AF-9",
            site_name="Médiathèque",
            address="12 rue Haute, 33000 Bordeaux",
            contact="M. Martin",
            brand="Wallbox",
            terminals="2x7,4kW",
            construction_end_date="15/12/2021",
            maintenance_flag="Oui",
            invoice_date="10/01/2022",
            period1="a planifier",
            period2="",
        ),
        AS_OF,
    )


def test_export_row_formats_display_values():
    row = export_row(_site())

    assert list(row) == EXPORT_HEADERS
    assert row["ID"] == "3-AF-9"
    assert row["Date Fin Chantier"] == "15/12/2021"
    assert row["Date Début Contrat"] == "10/01/2022"
    assert row["Contrat Maintenance"] == "OUI"
    assert row["Statut Contrat (Calculé)"] == "Reconduction"
    assert row["Maintenance An 2"] == "À planifier"
    assert row["Date Maint. An 2"] == "a planifier"
    assert row["Maintenance An 3"] == "Inconnu"
    assert row["Date Maint. An 3"] == ""
    assert row["Action Requise"] == "À PLANIFIER"
    assert row["Retard"] == "OUI"


def test_write_sites_csv_keeps_header_order(tmp_path: Path):
    out_path = write_sites_csv(tmp_path / "out" / "sites.csv", [_site()])

    with out_path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        rows = list(reader)

    assert reader.fieldnames == EXPORT_HEADERS
    assert rows[0]["Site"] == "Médiathèque"
