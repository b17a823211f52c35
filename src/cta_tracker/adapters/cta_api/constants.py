"""Constants for the CTA APIs.

Train Tracker: https://www.transitchicago.com/developers/ttdocs/
Bus Tracker: https://www.transitchicago.com/developers/bustracker/
Customer Alerts: https://www.transitchicago.com/developers/alerts/
"""

TRAIN_TRACKER_PROVIDER = "CTA Train Tracker"
BUS_TRACKER_PROVIDER = "CTA Bus Tracker"
ALERTS_PROVIDER = "CTA Customer Alerts"

TRAIN_POSITIONS_URL = "https://lapi.transitchicago.com/api/1.0/ttpositions.aspx"
TRAIN_ARRIVALS_URL = "https://lapi.transitchicago.com/api/1.0/ttarrivals.aspx"
BUS_VEHICLES_URL = "https://www.ctabustracker.com/bustime/api/v3/getvehicles"
ALERTS_URL = "https://www.transitchicago.com/api/1.0/alerts.aspx"

# getvehicles accepts at most this many comma-separated routes
BUS_MAX_ROUTES_PER_REQUEST = 10

# Bus Tracker reports routes without active vehicles as an error entry
BUS_NO_DATA_MESSAGE = "No data found for parameter"
