"""pytest fixtures which are globally available throughout the suite."""
import io
import logging
import zipfile

import pytest

WRAPPER = 'debdut-no-build-1a2b3c4'

# (name, content, mode); directories carry no content
ARCHIVE_ENTRIES = [
    (f'{WRAPPER}/', None, 0o755),
    (f'{WRAPPER}/README.md', b'# no-build\n', 0o644),
    (f'{WRAPPER}/react/', None, 0o755),
    (f'{WRAPPER}/react/index.html', b'<!doctype html>\n<div id="root"></div>\n', 0o644),
    (f'{WRAPPER}/react/js/', None, 0o755),
    (f'{WRAPPER}/react/js/app.js', b'console.log("react");\n', 0o644),
    (f'{WRAPPER}/react/serve.sh', b'#!/bin/sh\npython -m http.server\n', 0o755),
    (f'{WRAPPER}/vue/', None, 0o755),
    (f'{WRAPPER}/vue/index.html', b'<!doctype html>\n<div id="app"></div>\n', 0o644),
]


def build_archive(entries):
    """Return the bytes of a zip archive holding ``entries``."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, 'w') as zip_file:
        for name, content, mode in entries:
            info = zipfile.ZipInfo(name)
            if content is None:
                info.external_attr = ((0o040000 | mode) << 16) | 0x10
                zip_file.writestr(info, b'')
            else:
                info.external_attr = (0o100000 | mode) << 16
                zip_file.writestr(info, content)
    return buffer.getvalue()


def damaged_archive(damage):
    """Return a valid zip archive whose single template file cannot be read.

    ``damage`` is one of ``corrupt`` (broken deflate stream), ``encrypted``
    (encryption flag set) or ``compression`` (unknown compression method).
    """
    name = f'{WRAPPER}/react/index.html'
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, 'w', zipfile.ZIP_DEFLATED) as zip_file:
        zip_file.writestr(name, b'<!doctype html>\n' * 64)
        header_offset = zip_file.getinfo(name).header_offset
    data = bytearray(buffer.getvalue())
    central = data.find(b'PK\x01\x02')

    if damage == 'corrupt':
        # First deflate block header with the reserved block type
        data[header_offset + 30 + len(name)] = 0xFF
    elif damage == 'encrypted':
        data[header_offset + 6] |= 0x01
        data[central + 8] |= 0x01
    elif damage == 'compression':
        data[header_offset + 8 : header_offset + 10] = (99).to_bytes(2, 'little')
        data[central + 10 : central + 12] = (99).to_bytes(2, 'little')
    return bytes(data)


@pytest.fixture
def archive_bytes():
    """Bytes of an archive laid out the way the hosting API serves it."""
    return build_archive(ARCHIVE_ENTRIES)


@pytest.fixture
def archive_path(tmp_path, archive_bytes):
    """Archive written outside of the working directory."""
    path = tmp_path / 'archives' / 'repo.zip'
    path.parent.mkdir()
    path.write_bytes(archive_bytes)
    return path


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Empty directory used as the current working directory."""
    path = tmp_path / 'work'
    path.mkdir()
    monkeypatch.chdir(path)
    return path


@pytest.fixture
def fake_response(mocker):
    """Return a factory of fake ``requests`` responses with a given body."""

    def _response(content):
        response = mocker.Mock(headers={'Content-Length': str(len(content))})
        response.iter_content.return_value = [content]
        return response

    return _response


@pytest.fixture
def mock_get(mocker, fake_response, archive_bytes):
    """Patch ``requests.get`` to serve the test archive."""
    return mocker.patch(
        'nobuild.download.requests.get',
        return_value=fake_response(archive_bytes),
    )


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep the user's own configuration out of the tests."""
    monkeypatch.delenv('NOBUILD_CONFIG', raising=False)
    monkeypatch.setattr(
        'nobuild.config.USER_CONFIG_PATH', str(tmp_path / 'home' / '.nobuildrc')
    )


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop handlers installed by ``configure_logger`` after each test."""
    yield
    logger = logging.getLogger('nobuild')
    for handler in logger.handlers:
        handler.close()
    del logger.handlers[:]


def list_files(root):
    """Return the sorted relative paths of all files below ``root``."""
    return sorted(
        str(path.relative_to(root)).replace('\\', '/')
        for path in root.rglob('*')
        if path.is_file()
    )
