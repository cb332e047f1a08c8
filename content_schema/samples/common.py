"""Display options shared by the sample document types."""

DATETIME_OPTIONS = {
    "dateFormat": "YYYY-MM-DD",
    "timeFormat": "HH:mm",
    "calendarTodayLabel": "Today",
}


def dropdown(values):
    return {"list": [{"title": v, "value": v} for v in values], "layout": "dropdown"}
