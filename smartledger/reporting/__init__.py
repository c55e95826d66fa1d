"""Category breakdown and budget-vs-spent reports built on the stores."""
