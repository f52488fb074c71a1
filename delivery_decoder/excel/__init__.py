"""Excel workbook reading."""
