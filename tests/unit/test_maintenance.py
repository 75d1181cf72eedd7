import pytest

from chargesites.classify.maintenance import resolve_maintenance_status
from chargesites.common.models import MaintenanceStatus


def test_empty_cell_is_unknown():
    assert resolve_maintenance_status("") is MaintenanceStatus.UNKNOWN
    assert resolve_maintenance_status("  ") is MaintenanceStatus.UNKNOWN


@pytest.mark.parametrize("cell", ["à planifier", "a planifier", "A PLANIFIER", "RDM à planifier"])
def test_to_schedule_is_planned_regardless_of_accents(cell):
    assert resolve_maintenance_status(cell) is MaintenanceStatus.PLANNED


@pytest.mark.parametrize("cell", ["NA", "n/a", "SO", "s.o"])
def test_not_applicable_markers(cell):
    assert resolve_maintenance_status(cell) is MaintenanceStatus.NOT_APPLICABLE


def test_rdm_mention_is_done():
    assert resolve_maintenance_status("RDM") is MaintenanceStatus.DONE


def test_date_string_is_done():
    assert resolve_maintenance_status("5/3/2023") is MaintenanceStatus.DONE


def test_serial_number_is_done():
    assert resolve_maintenance_status(45000) is MaintenanceStatus.DONE


def test_long_free_text_is_done():
    assert resolve_maintenance_status("faite par Dupont") is MaintenanceStatus.DONE


def test_short_unrecognised_text_is_unknown():
    assert resolve_maintenance_status("ok") is MaintenanceStatus.UNKNOWN
    assert resolve_maintenance_status("?????") is MaintenanceStatus.UNKNOWN


def test_out_of_range_serial_is_classified_without_error():
    assert resolve_maintenance_status(10**400) == MaintenanceStatus.DONE
