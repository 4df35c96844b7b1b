"""Integration tests for end-to-end workflows."""

from budgetreport.cli.main import cli


def _created_id(output: str) -> str:
    # Extract ID from output like "Created budget 'B1' (ID: 1) for ..."
    return output.split("ID:")[1].split(")")[0].strip()


def test_full_workflow(cli_runner, temp_db, monkeypatch, tmp_path):
    """Test complete workflow: group → accounts → budget → targets → postings → report."""
    monkeypatch.delenv("HTML2PDF_URL", raising=False)

    def run(*args):
        result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args])
        assert result.exit_code == 0, result.output
        return result

    # Step 1: Account structure
    run("group", "create", "Operations")
    run("account", "create", "Office", "--group", "Operations", "--code", "4100",
        "--description", "Paper and toner")
    travel_id = _created_id(run("account", "create", "Travel", "--group", "Operations").output)

    # Step 2: Budget with targets
    budget_id = _created_id(run("budget", "create", "Budget 2024", "--period", "2024").output)
    run("budget", "set-target", "Budget 2024", "Office", "1000.00")
    run("budget", "set-target", budget_id, travel_id, "500.00")

    # Step 3: Postings, one outside the budget period
    run("posting", "add", "Office", "400.10", "--date", "2024-02-01")
    run("posting", "add", "Office", "650.00", "--date", "2024-11-30")
    run("posting", "add", "Travel", "120.00", "--date", "2024-05-05")
    run("posting", "add", "Travel", "80.00", "--date", "2023-12-31")

    # Step 4: Template and report
    run("template", "create", "Overview", "--show", "actual", "--show", "target",
        "--show", "difference", "--show", "budget-descriptions")
    output = tmp_path / "overview.html"
    run("report", "generate", "--template", "Overview", "--budget", "Budget 2024",
        "--account", "Office", "--account", "Travel", "--output", str(output))

    html = output.read_text(encoding="utf-8")
    assert "Budget 2024" in html
    # Office: 1.050,10 actual against 1.000,00 target
    assert "1.050,10 €" in html
    assert "50,10 €" in html
    # Travel: the 2023 posting is outside the period
    assert "120,00 €" in html
    assert "-380,00 €" in html
    # Totals
    assert "1.170,10 €" in html
    assert "1.500,00 €" in html
    assert "-329,90 €" in html
