from chargesites.classify.region import UNKNOWN_REGION, department_coordinates, extract_region


def test_extract_region_from_postal_code():
    assert extract_region("12 Rue de Paris, 75015 Paris") == "75"


def test_extract_region_without_postal_code():
    assert extract_region("no postal code here") == "Unknown"
    assert extract_region("") == UNKNOWN_REGION


def test_extract_region_ignores_longer_digit_runs():
    assert extract_region("SIRET 123456789, 69003 Lyon") == "69"


def test_department_coordinates_lookup():
    assert department_coordinates("75") == (54, 26)
    assert department_coordinates("2A") is None
