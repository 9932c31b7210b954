import os
import uuid
from werkzeug.utils import secure_filename
from flask import current_app
from sqlalchemy import event
from sqlalchemy.orm import Session

from constructor_pages.extensions import db

# session.info keys; files are only touched once the transaction settles
PENDING_DELETES = "media_pending_deletes"
PENDING_SAVES = "media_pending_saves"


def allowed_file(filename):
    allowed = current_app.config["ALLOWED_IMAGE_EXTENSIONS"]
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in allowed

def upload_folder():
    folder = current_app.config.get('UPLOAD_FOLDER', 'uploads')
    if not os.path.isabs(folder):
        folder = os.path.join(current_app.root_path, folder)
    return folder

def url_prefix():
    return "/" + current_app.config.get('UPLOAD_URL_PREFIX', '/uploads').strip('/')

def save_file(file):
    """
    Stores an uploaded image under UPLOAD_FOLDER and returns its public
    URL (under UPLOAD_URL_PREFIX). The file is removed again if the
    current transaction rolls back.
    """
    if not file.filename or not allowed_file(file.filename):
        raise ValueError("File type not allowed")

    filename = secure_filename(file.filename)
    ext = filename.rsplit('.', 1)[1].lower()
    unique_filename = f"{uuid.uuid4().hex}.{ext}"

    folder = upload_folder()
    os.makedirs(folder, exist_ok=True)
    file.save(os.path.join(folder, unique_filename))

    file_url = f"{url_prefix()}/{unique_filename}"
    db.session.info.setdefault(PENDING_SAVES, []).append(file_url)
    return file_url


def delete_file(file_url):
    """
    Schedules a file previously returned by save_file for deletion after
    the current transaction commits.
    References outside UPLOAD_URL_PREFIX (external URLs) are left alone.
    """
    if not _is_local(file_url):
        return False

    db.session.info.setdefault(PENDING_DELETES, []).append(file_url)
    return True


def _is_local(file_url):
    return bool(file_url) and file_url.startswith(url_prefix() + "/")


def _remove(file_url):
    file_path = os.path.join(upload_folder(), os.path.basename(file_url))

    if os.path.exists(file_path):
        try:
            os.remove(file_path)
            return True
        except OSError as e:
            current_app.logger.error(f"Failed to delete file {file_path}: {e}")
            return False
    return False


@event.listens_for(Session, "after_commit")
def _flush_pending_deletes(session):
    session.info.pop(PENDING_SAVES, None)
    for file_url in session.info.pop(PENDING_DELETES, []):
        _remove(file_url)


@event.listens_for(Session, "after_soft_rollback")
def _discard_pending_files(session, previous_transaction):
    # a rolled back nested transaction leaves the outer one open
    if previous_transaction.nested:
        return
    session.info.pop(PENDING_DELETES, None)
    for file_url in session.info.pop(PENDING_SAVES, []):
        _remove(file_url)
