"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

ORGANIZATION = "Divisional Forest Office"
LOCATION = "Vavuniya, Sri Lanka"

RETIREMENT_AGE = 60

ISO_DATE_FORMAT = "%Y-%m-%d"
DISPLAY_DATE_FORMAT = "%d-%m-%Y"
DISPLAY_DATETIME_FORMAT = "%d-%m-%Y %H:%M"
FILENAME_DATE_FORMAT = "%Y%m%d"

DATABASE_FILENAME = "staff_database.db"

DESIGNATIONS = (
    "District Forest Officer",
    "Asst.District Forest Officer",
    "Management Service Officer",
    "Development Officer",
    "Range Forest officer",
    "Beat forest officer",
    "extension officer",
    "field forest assistant",
    "office employee service",
    "garden labour",
)

SALARY_CODES = ("S1", "S2", "S3", "D1", "D2", "D3", "A1", "A2")

# Photo handling: staff photos are stored as 3:4 JPEG thumbnails.
IMAGE_MAX_BYTES = 5 * 1024 * 1024
IMAGE_ACCEPTED_FORMATS = ("JPEG", "PNG", "WEBP")
IMAGE_OUTPUT_SIZE = (240, 320)
IMAGE_JPEG_QUALITY = 80
