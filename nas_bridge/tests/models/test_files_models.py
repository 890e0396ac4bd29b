from nas_bridge.models.files import RemoteFileRef, TransferPayload


def test_remote_file_ref_from_listing_message() -> None:
    ref = RemoteFileRef.from_message(
        {
            "name": "Logo.PNG",
            "path": "/DATA/Figma/Logo.PNG",
            "is_dir": False,
            "size": 2048,
            "modified": 1_700_000_000,
            "extensions": None,
        }
    )

    assert ref.name == "Logo.PNG"
    assert ref.path == "/DATA/Figma/Logo.PNG"
    assert ref.is_directory is False
    assert ref.size_bytes == 2048
    assert ref.modified_epoch == 1_700_000_000
    assert ref.extension == "png"


def test_remote_file_ref_defaults_optional_fields() -> None:
    ref = RemoteFileRef.from_message({"name": "Photos", "path": "/DATA/Photos", "is_dir": True})

    assert ref.is_directory is True
    assert ref.size_bytes == 0


def test_transfer_payload_wire_filename_appends_length() -> None:
    payload = TransferPayload.for_file(b"12345", "frame.png", "/DATA")

    assert payload.mime_type == "image/png"
    assert payload.size == 5
    assert payload.wire_filename == "frame.png:5"


def test_transfer_payload_empty_file() -> None:
    payload = TransferPayload.for_file(b"", "empty.bin", "/DATA")

    assert payload.mime_type == "application/octet-stream"
    assert payload.wire_filename == "empty.bin:0"
