# contenthub/services/storage.py
import boto3
import logging
from typing import Optional
from botocore.exceptions import BotoCoreError, ClientError
from contenthub.config import settings

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Object store call failed (network, credentials, quota...)"""


def build_file_key(project_id: int, file_id: str, file_name: str) -> str:
    """S3 key for a project file: projects/{projectId}/{fileId}-{originalName}"""
    return f"projects/{project_id}/{file_id}-{file_name}"


class S3Service:
    def __init__(self, bucket: Optional[str] = None, region: Optional[str] = None):
        self.region = region or settings.AWS_REGION
        self.bucket = bucket or settings.S3_BUCKET_NAME

        client_kwargs = {"region_name": self.region}
        if settings.AWS_ACCESS_KEY_ID and settings.AWS_SECRET_ACCESS_KEY:
            client_kwargs["aws_access_key_id"] = settings.AWS_ACCESS_KEY_ID
            client_kwargs["aws_secret_access_key"] = settings.AWS_SECRET_ACCESS_KEY
        self.s3_client = boto3.client('s3', **client_kwargs)

    def public_url(self, s3_key: str) -> str:
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{s3_key}"

    def put(self, s3_key: str, body: bytes, content_type: Optional[str] = None) -> str:
        """
        Upload an object.
        Returns: public URL of the stored object
        """
        params = {
            'Bucket': self.bucket,
            'Key': s3_key,
            'Body': body,
        }
        if content_type:
            params['ContentType'] = content_type

        try:
            self.s3_client.put_object(**params)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"S3 upload failed for {s3_key}: {e}")
            raise StorageError(f"Failed to upload {s3_key}: {str(e)}") from e

        logger.info(f"Uploaded s3://{self.bucket}/{s3_key} ({len(body)} bytes)")
        return self.public_url(s3_key)

    def get(self, s3_key: str) -> bytes:
        """Download an object's content"""
        try:
            response = self.s3_client.get_object(Bucket=self.bucket, Key=s3_key)
            return response['Body'].read()
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Failed to download {s3_key}: {str(e)}") from e

    def delete(self, s3_key: str) -> None:
        """Delete an object from S3"""
        try:
            self.s3_client.delete_object(Bucket=self.bucket, Key=s3_key)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"S3 delete failed for {s3_key}: {e}")
            raise StorageError(f"Failed to delete {s3_key}: {str(e)}") from e

        logger.info(f"Deleted s3://{self.bucket}/{s3_key}")

    def generate_download_presigned_url(
        self,
        s3_key: str,
        expires_in: Optional[int] = None
    ) -> str:
        """Generate presigned URL for downloading a file"""
        try:
            return self.s3_client.generate_presigned_url(
                'get_object',
                Params={
                    'Bucket': self.bucket,
                    'Key': s3_key
                },
                ExpiresIn=expires_in or settings.PRESIGNED_URL_EXPIRES
            )
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Failed to generate download URL: {str(e)}") from e
