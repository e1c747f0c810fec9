import csv
import datetime
from decimal import Decimal

from django.db import models
from django.http import HttpResponse


def _cell(value):
    if value is None:
        return ""
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return format(value, "f")
    if isinstance(value, models.Model):
        return str(value)
    return value


def csv_response(filename, columns, rows):
    """
    Streams `rows` (dicts or model instances) as a CSV attachment.
    The header row is always written, even for an empty result.
    """
    response = HttpResponse(content_type="text/csv")
    response["Content-Disposition"] = f"attachment; filename={filename}.csv"

    writer = csv.writer(response, lineterminator="\n")
    writer.writerow(columns)
    for row in rows:
        if isinstance(row, dict):
            writer.writerow([_cell(row.get(col)) for col in columns])
        else:
            writer.writerow([_cell(getattr(row, col, None)) for col in columns])
    return response
