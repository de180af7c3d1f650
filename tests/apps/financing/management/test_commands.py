from io import StringIO
from unittest.mock import patch

from django.core.management import call_command

from apps.financing.domain.models import Country, ReferenceData, ReferenceDataWarning


LOADER = "apps.financing.management.commands.fetch_reference_data.ReferenceDataLoader"


def test_fetch_reference_data_prints_totals():
    reference_data = ReferenceData(
        countries=(Country("DE", "Germany"), Country("US", "United States")),
        currencies={"EUR": "Euro"},
    )
    out = StringIO()

    with patch(LOADER) as mock_loader:
        mock_loader.return_value.load.return_value = reference_data
        call_command("fetch_reference_data", stdout=out)

    assert "Loaded 2 countries and 1 currencies" in out.getvalue()


def test_fetch_reference_data_lists_and_warns():
    reference_data = ReferenceData(
        countries=(Country("US", "United States"),),
        currencies={"USD": "US Dollar"},
        warnings=(ReferenceDataWarning("currencies", "Could not load the currency list"),),
    )
    out = StringIO()

    with patch(LOADER) as mock_loader:
        mock_loader.return_value.load.return_value = reference_data
        call_command("fetch_reference_data", "--list", stdout=out)

    output = out.getvalue()
    assert "US  United States" in output
    assert "USD  US Dollar" in output
    assert "[currencies] Could not load the currency list" in output
