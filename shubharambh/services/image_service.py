import base64
import binascii
import logging
import os
import re
import uuid
from flask import current_app
from werkzeug.utils import secure_filename

logger = logging.getLogger(__name__)

MAX_LISTING_IMAGES = 3
ALLOWED_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp'}
DATA_URI_RE = re.compile(r'^data:image/(?P<ext>[a-zA-Z0-9.+-]+);base64,(?P<payload>.+)$', re.DOTALL)


class ImageUploadError(Exception):
    pass


class LocalImageHost:
    """Stores uploaded images under UPLOAD_FOLDER and serves them from /uploads"""

    def __init__(self, upload_folder=None, url_prefix='/uploads'):
        self.upload_folder = upload_folder
        self.url_prefix = url_prefix

    def upload(self, data_uri, folder):
        match = DATA_URI_RE.match(data_uri)
        if not match:
            raise ImageUploadError('Not an inline image')
        ext = match.group('ext').lower()
        if ext == 'jpeg':
            ext = 'jpg'
        if ext not in ALLOWED_EXTENSIONS:
            raise ImageUploadError(f'Unsupported image type: {ext}')
        try:
            content = base64.b64decode(match.group('payload'), validate=True)
        except (binascii.Error, ValueError) as e:
            raise ImageUploadError(f'Invalid image data: {e}')

        parts = [secure_filename(part) for part in folder.split('/') if secure_filename(part)]
        root = self.upload_folder or current_app.config['UPLOAD_FOLDER']
        target_dir = os.path.join(root, *parts)
        os.makedirs(target_dir, exist_ok=True)
        filename = f"{uuid.uuid4().hex}.{ext}"
        with open(os.path.join(target_dir, filename), 'wb') as fh:
            fh.write(content)
        return '/'.join([self.url_prefix] + parts + [filename])


def get_image_host():
    return current_app.extensions.get('image_host') or LocalImageHost()


def process_listing_images(raw_images, category, image_host=None):
    """Keep hosted URLs, upload inline images, drop anything that fails.

    Each image is handled on its own so one bad upload never loses the others.
    """
    image_host = image_host or get_image_host()
    images = []
    for index, image in enumerate((raw_images or [])[:MAX_LISTING_IMAGES]):
        if not image or not isinstance(image, str):
            continue
        if image.startswith('https://'):
            images.append(image)
        elif image.startswith('data:image'):
            try:
                images.append(image_host.upload(image, f'shubharambh/{category}'))
            except Exception as e:
                logger.warning(f"Image {index} upload failed for {category} listing: {e}")
        else:
            logger.warning(f"Ignoring unsupported image reference at position {index}")
    return images
