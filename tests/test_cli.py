"""Tests for the command line interface."""

import pytest
from budgetreport.cli.main import cli
from budgetreport.domain.report import ReportService


@pytest.fixture
def run(cli_runner, temp_db, monkeypatch):
    """Invoke the CLI against the temporary database."""
    monkeypatch.delenv("HTML2PDF_URL", raising=False)
    monkeypatch.delenv("BUDGETREPORT_RENDER_TIMEOUT", raising=False)

    def _run(*args, input=None):
        return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], input=input)

    return _run


def test_group_create_and_list(run):
    result = run("group", "create", "Personnel", "--description", "Staff costs")
    assert result.exit_code == 0
    assert "Created account group 'Personnel'" in result.output

    result = run("group", "list")
    assert result.exit_code == 0
    assert "Personnel" in result.output


def test_group_list_empty(run):
    result = run("group", "list")
    assert result.exit_code == 0
    assert "No account groups found" in result.output


def test_account_create_by_group_name(run):
    run("group", "create", "Personnel")

    result = run("account", "create", "Salaries", "--group", "Personnel", "--code", "6000")
    assert result.exit_code == 0
    assert "Created account 'Salaries'" in result.output

    result = run("account", "list", "--group", "Personnel")
    assert "Salaries" in result.output
    assert "6000" in result.output


def test_account_create_unknown_group(run):
    result = run("account", "create", "Salaries", "--group", "Nope")
    assert result.exit_code == 1
    assert "not found" in result.output.lower()


def test_account_create_duplicate(run):
    run("group", "create", "G")
    run("account", "create", "Rent", "--group", "G")

    result = run("account", "create", "Rent", "--group", "G")
    assert result.exit_code == 1
    assert "already exists" in result.output.lower()


def test_budget_create_with_period(run):
    result = run("budget", "create", "Budget 2024", "--period", "2024")
    assert result.exit_code == 0
    assert "01.01.2024 - 31.12.2024" in result.output

    result = run("budget", "list")
    assert "Budget 2024" in result.output


def test_budget_create_with_dates(run):
    result = run("budget", "create", "Q1", "--start", "01.01.2024", "--end", "2024-03-31")
    assert result.exit_code == 0
    assert "01.01.2024 - 31.03.2024" in result.output


def test_budget_create_reversed_period(run):
    result = run("budget", "create", "Bad", "--start", "2024-03-01", "--end", "2024-01-01")
    assert result.exit_code == 1
    assert "Error:" in result.output


def test_set_target_and_list(run, sample_data):
    result = run("budget", "set-target", "B1", "A1", "1,250.00")
    assert result.exit_code == 0
    assert "1250.00" in result.output

    result = run("budget", "targets", "B1")
    assert result.exit_code == 0
    assert "1250.00" in result.output
    assert "50.00" in result.output


def test_set_target_invalid_amount(run, sample_data):
    result = run("budget", "set-target", "B1", "A1", "lots")
    assert result.exit_code == 1
    assert "Could not parse amount" in result.output


def test_posting_add_and_list(run, sample_data):
    result = run("posting", "add", "A2", "(12.50)", "--date", "2024-07-01", "--description", "Refund")
    assert result.exit_code == 0
    assert "-12.50" in result.output
    assert "01.07.2024" in result.output

    result = run("posting", "list", "--account", "A2")
    assert "Refund" in result.output


def test_posting_add_german_amount(run, sample_data):
    result = run("posting", "add", "A2", "1.234,56", "--date", "01.07.2024")
    assert result.exit_code == 0
    assert "Recorded posting 1234.56" in result.output


def test_import_datev_export(run, sample_data, tmp_path):
    export = tmp_path / "export.csv"
    export.write_text(
        "Umsatz (ohne Soll/Haben-Kz);Soll/Haben-Kennzeichen;Konto;"
        "Gegenkonto (ohne BU-Schlüssel);Buchungstext;Buchungsdatum\n"
        "12,50;S;4100;1200;Pens;20240110\n"
        "3,00;S;8000;1200;Other;20240110\n",
        encoding="utf-8",
    )

    result = run("import", str(export))
    assert result.exit_code == 0
    assert "Imported: 1 postings" in result.output
    assert "Skipped: 1 rows" in result.output

    result = run("posting", "list", "--account", "A1")
    assert "12.50" in result.output
    assert "Pens" in result.output


def test_import_rejects_non_datev_file(run, tmp_path):
    export = tmp_path / "bank.csv"
    export.write_text("Date,Amount\n2024-01-01,1.00\n", encoding="utf-8")

    result = run("import", str(export))
    assert result.exit_code == 1
    assert "DATEV header not found" in result.output


def test_account_delete_in_use(run, sample_data):
    result = run("account", "delete", "A1", "--yes")
    assert result.exit_code == 1
    assert "Cannot delete account" in result.output

    result = run("account", "delete", "A1", "--force", "--yes")
    assert result.exit_code == 0
    assert "Deleted account 'A1'" in result.output

    result = run("account", "list")
    assert "A1" not in result.output


def test_account_delete_cancelled(run, sample_data):
    result = run("account", "delete", "A2", "--force", input="n\n")
    assert "Deletion cancelled" in result.output

    result = run("account", "list")
    assert "A2" in result.output


def test_group_delete(run, sample_data):
    result = run("group", "delete", "Operations", "--yes")
    assert result.exit_code == 1
    assert "it has 2 accounts" in result.output

    run("group", "create", "Empty")
    result = run("group", "delete", "Empty", input="y\n")
    assert result.exit_code == 0
    assert "Deleted account group 'Empty'" in result.output


def test_budget_delete(run, sample_data):
    result = run("budget", "delete", "B1", "--yes")
    assert result.exit_code == 0
    assert "Deleted budget 'B1'" in result.output

    result = run("budget", "list")
    assert "No budgets found" in result.output


def test_template_create_and_list(run):
    result = run("template", "create", "Overview", "--show", "actual", "--show", "difference")
    assert result.exit_code == 0

    result = run("template", "list")
    assert "Overview" in result.output
    assert "actual, difference" in result.output
    assert "built-in" in result.output


def test_template_create_with_body_file(run, tmp_path):
    body = tmp_path / "layout.html.j2"
    body.write_text("<h1>{{ title }}</h1>", encoding="utf-8")

    result = run("template", "create", "Custom", "--body-file", str(body))
    assert result.exit_code == 0

    result = run("template", "list")
    assert "custom" in result.output


def test_template_create_rejects_unknown_option(run):
    result = run("template", "create", "Overview", "--show", "variance")
    assert result.exit_code != 0


def test_report_generate_html(run, sample_data, all_fields_template):
    result = run(
        "report", "generate", "--template", "All values", "--budget", "B1",
        "--account", "A1", "--account", "A2",
    )

    assert result.exit_code == 0
    assert "<!DOCTYPE html>" in result.output
    assert "100,00 €" in result.output
    assert "20,00 €" in result.output


def test_report_generate_show_overrides_template(run, sample_data, all_fields_template):
    result = run(
        "report", "generate", "--template", "All values", "--budget", "B1",
        "--account", "A1", "--show", "account-descriptions",
    )

    assert result.exit_code == 0
    assert "Office supplies" in result.output
    assert "100,00 €" not in result.output


def test_report_generate_to_file(run, sample_data, all_fields_template, tmp_path):
    output = tmp_path / "report.html"

    result = run(
        "report", "generate", "--template", str(all_fields_template), "--budget", "B1",
        "--account", "A1", "--output", str(output),
    )

    assert result.exit_code == 0
    assert "Wrote html report" in result.output
    assert "80,00 €" in output.read_text(encoding="utf-8")


def test_report_generate_skips_missing_account_id(run, sample_data, all_fields_template):
    result = run(
        "report", "generate", "--template", "All values", "--budget", "B1",
        "--account", "A1", "--account", "9999",
    )

    assert result.exit_code == 0
    assert "Account 9999 not found" in result.output


def test_report_generate_empty_selection(run, sample_data, all_fields_template):
    result = run("report", "generate", "--template", "All values", "--account", "A1")
    assert result.exit_code == 1
    assert "At least one budget must be selected" in result.output


def test_report_generate_unsupported_type(run, sample_data, all_fields_template):
    result = run(
        "report", "generate", "--template", "All values", "--budget", "B1",
        "--account", "A1", "--type", "xml",
    )
    assert result.exit_code == 1
    assert "Unsupported export type 'xml'" in result.output


def test_report_generate_pdf_without_renderer(run, sample_data, all_fields_template):
    result = run(
        "report", "generate", "--template", "All values", "--budget", "B1",
        "--account", "A1", "--type", "pdf",
    )
    assert result.exit_code == 1
    assert "not configured" in result.output


def test_report_generate_unknown_template_id(run, sample_data):
    result = run("report", "generate", "--template", "77", "--budget", "B1", "--account", "A1")
    assert result.exit_code == 1
    assert "Report template 77 not found" in result.output


def test_report_show(run, temp_db, sample_data, all_fields_template, pdf_transport, tmp_path):
    from budgetreport.rendering import Html2PdfClient, RenderDispatcher

    dispatcher = RenderDispatcher(
        pdf_client=Html2PdfClient("http://html2pdf.test", transport=pdf_transport)
    )
    report_id = ReportService(temp_db, dispatcher=dispatcher).export_report(
        all_fields_template, [sample_data["B1"]], [sample_data["A1"]]
    )
    output = tmp_path / "stored.pdf"

    result = run("report", "show", str(report_id), "--output", str(output))

    assert result.exit_code == 0
    assert output.read_bytes() == pdf_transport.pdf


def test_report_show_missing(run, tmp_path):
    result = run("report", "show", "12", "--output", str(tmp_path / "x.pdf"))
    assert result.exit_code == 1
    assert "Report 12 not found" in result.output
