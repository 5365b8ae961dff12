APP_NAME = "vlmatch"
APP_TITLE = "Zero-shot Vision-Language Matching"

ENV_PREFIX = "VLMATCH_"

# Pixels are normalized with x * (2 / PIXEL_MAX) - 1
PIXEL_MAX = 255.0

REPORT_PRECISION = 4
