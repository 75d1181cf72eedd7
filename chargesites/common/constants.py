"""Application constants."""

COMMANDS = (
    "classify",
    "summary",
)
EXIT_SUCCESS = 0
EXIT_PARTIAL = 10
EXIT_HARD_FAIL = 20

SITES_FILENAME = "sites.csv"
SUMMARY_FILENAME = "summary.json"

# Columns holding dates or maintenance visits; numeric cells there are serials.
DATE_FIELDS = (
    "affair_date",
    "construction_end_date",
    "period1",
    "period2",
    "invoice_date",
    "contract_date",
)

JSON_LOG_FIELDS = (
    "timestamp",
    "run_id",
    "stage",
    "event",
    "status",
    "duration_ms",
    "rows_in",
    "rows_out",
    "error_code",
    "message",
)
