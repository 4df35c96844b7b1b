"""Budget administration and reporting."""

__version__ = "0.1.0"


# The CLI pulls in every service; only load it when asked for
def __getattr__(name):
    if name == "main":
        from budgetreport.cli.main import main
        return main
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
