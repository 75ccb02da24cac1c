"""Domain Package - Run request, stage results and run outcome."""
