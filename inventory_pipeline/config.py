import os
from dotenv import load_dotenv

load_dotenv()  # load environment variables from .env file

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

# Local storage
DB_PATH = os.environ.get("INVENTORY_DB_PATH", os.path.join(BASE_DIR, "data", "inventory.db"))
DATA_DIR = os.environ.get("INVENTORY_DATA_DIR", os.path.join(BASE_DIR, "data", "sample"))
EXPORT_DIR = os.environ.get("INVENTORY_EXPORT_DIR", os.path.join(BASE_DIR, "data", "reports"))
LOG_DIR = os.environ.get("LOG_DIR", "logs")

# Reporting
LOW_STOCK_THRESHOLD = int(os.environ.get("LOW_STOCK_THRESHOLD", "50"))

# Read AWS credentials and region from environment variables
AWS_ACCESS_KEY_ID = os.environ.get("AWS_ACCESS_KEY_ID")
AWS_SECRET_ACCESS_KEY = os.environ.get("AWS_SECRET_ACCESS_KEY")
AWS_REGION = os.environ.get("AWS_REGION", "us-east-1")
S3_BUCKET = os.environ.get("INVENTORY_S3_BUCKET")
