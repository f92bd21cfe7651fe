import os
import logging
import datetime
from typing import Dict, Optional

import boto3
import pandas as pd
from boto3.exceptions import S3UploadFailedError
from botocore.exceptions import BotoCoreError, ClientError

from inventory_pipeline import config

logger = logging.getLogger("inventory_pipeline.export")


def export_report_to_parquet(
    df: pd.DataFrame,
    report_name: str,
    output_dir: str,
    timestamp: Optional[str] = None
) -> Optional[str]:
    """
    Write one report to a timestamped Parquet file.

    Args:
        df: Report rows
        report_name: Used in the file name
        output_dir: Directory to save the exported file
        timestamp: Shared run timestamp (default: now)

    Returns:
        Path to the exported file if successful, None otherwise
    """
    if timestamp is None:
        timestamp = datetime.datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    output_file = os.path.join(output_dir, f"{timestamp}_{report_name}.parquet")

    try:
        os.makedirs(output_dir, exist_ok=True)
        if df.empty:
            logger.warning(f"Report '{report_name}' is empty. Exporting an empty file.")
        df.to_parquet(output_file, index=False, engine='pyarrow')
        logger.info(f"Exported {len(df)} records from report '{report_name}' to {output_file}")
        return output_file

    except (OSError, ValueError) as e:
        logger.error(f"Error exporting report '{report_name}': {e}")
        return None


def export_reports(reports: Dict[str, pd.DataFrame], output_dir: str) -> Dict[str, Optional[str]]:
    """Export every report under one run timestamp."""
    ts = datetime.datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    return {
        name: export_report_to_parquet(df, name, output_dir, timestamp=ts)
        for name, df in reports.items()
    }


def get_s3_client():
    return boto3.client('s3',
                        aws_access_key_id=config.AWS_ACCESS_KEY_ID,
                        aws_secret_access_key=config.AWS_SECRET_ACCESS_KEY,
                        region_name=config.AWS_REGION)


# S3 upload: Upload a local file to the specified bucket and key using the AWS credentials.
def upload_file_to_s3(local_file: str, bucket: str, s3_key: str, s3_client=None) -> bool:
    if s3_client is None:
        s3_client = get_s3_client()
    try:
        s3_client.upload_file(local_file, bucket, s3_key)
        logger.info(f"Uploaded {local_file} to s3://{bucket}/{s3_key}")
        return True
    except (ClientError, BotoCoreError, S3UploadFailedError) as e:
        logger.error(f"Failed to upload {local_file} to s3://{bucket}/{s3_key}: {e}")
        return False


def upload_exports(files: Dict[str, Optional[str]], bucket: str, s3_client=None) -> Dict[str, bool]:
    """
    Upload exported report files, keyed by file name. Reports that failed
    to export are reported as not uploaded.
    """
    if s3_client is None:
        s3_client = get_s3_client()
    results = {}
    for name, local_file in files.items():
        if local_file is None:
            results[name] = False
            continue
        results[name] = upload_file_to_s3(local_file, bucket, os.path.basename(local_file), s3_client=s3_client)
    return results
