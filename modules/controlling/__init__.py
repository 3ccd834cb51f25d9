"""Dashboard aggregations: expense and invoice summaries, monthly estimate, chart series."""
