"""Tests for the image sidecar. Real files under tmp_path; remote references use a fake opener."""

import io

from callbook.infrastructure import ImageSidecar


def test_empty_reference_is_returned_unchanged(tmp_path) -> None:
    sidecar = ImageSidecar(tmp_path / "images")
    assert sidecar.resolve(None, 1) is None
    assert sidecar.resolve("", 1) == ""
    assert not (tmp_path / "images").exists()


def test_local_file_is_copied_and_resolve_is_idempotent(tmp_path) -> None:
    picked = tmp_path / "DCIM" / "IMG_001.JPEG"
    picked.parent.mkdir()
    picked.write_bytes(b"jpeg bytes")
    sidecar = ImageSidecar(tmp_path / "images")

    resolved = sidecar.resolve(str(picked), 3)
    assert resolved == str(tmp_path / "images" / "contact_3.jpeg")
    assert sidecar.is_owned(resolved)
    assert sidecar.resolve(resolved, 3) == resolved
    assert sorted(p.name for p in (tmp_path / "images").iterdir()) == ["contact_3.jpeg"]


def test_file_uri_is_copied(tmp_path) -> None:
    picked = tmp_path / "photo.png"
    picked.write_bytes(b"png")
    sidecar = ImageSidecar(tmp_path / "images")

    resolved = sidecar.resolve(picked.as_uri(), 1)
    assert resolved == str(tmp_path / "images" / "contact_1.png")


def test_opener_handles_external_references(tmp_path) -> None:
    opened = []

    def opener(reference: str):
        opened.append(reference)
        return io.BytesIO(b"remote bytes")

    sidecar = ImageSidecar(tmp_path / "images", opener=opener)
    resolved = sidecar.resolve("content://media/external/images/42", 5)

    assert opened == ["content://media/external/images/42"]
    assert resolved == str(tmp_path / "images" / "contact_5.jpg")
    assert (tmp_path / "images" / "contact_5.jpg").read_bytes() == b"remote bytes"


def test_unreadable_reference_falls_back_to_original(tmp_path) -> None:
    def opener(reference: str):
        raise PermissionError("grant revoked")

    sidecar = ImageSidecar(tmp_path / "images", opener=opener)
    assert sidecar.resolve("content://media/1", 1) == "content://media/1"
    assert list((tmp_path / "images").iterdir()) == []

    plain = ImageSidecar(tmp_path / "images")
    missing = str(tmp_path / "missing.jpg")
    assert plain.resolve(missing, 2) == missing


def test_new_image_with_other_suffix_replaces_old_one(tmp_path) -> None:
    jpg = tmp_path / "a.jpg"
    png = tmp_path / "b.png"
    jpg.write_bytes(b"1")
    png.write_bytes(b"2")
    sidecar = ImageSidecar(tmp_path / "images")

    sidecar.resolve(str(jpg), 1)
    sidecar.resolve(str(png), 1)
    assert sorted(p.name for p in (tmp_path / "images").iterdir()) == ["contact_1.png"]


def test_delete_removes_only_that_contacts_file(tmp_path) -> None:
    picked = tmp_path / "a.jpg"
    picked.write_bytes(b"1")
    sidecar = ImageSidecar(tmp_path / "images")
    sidecar.resolve(str(picked), 1)
    sidecar.resolve(str(picked), 11)

    assert sidecar.delete(1) is True
    assert sorted(p.name for p in (tmp_path / "images").iterdir()) == ["contact_11.jpg"]


def test_delete_missing_is_not_an_error(tmp_path) -> None:
    sidecar = ImageSidecar(tmp_path / "images")
    assert sidecar.delete(1) is True


def test_other_contacts_sidecar_is_copied_not_shared(tmp_path) -> None:
    picked = tmp_path / "a.jpg"
    picked.write_bytes(b"1")
    sidecar = ImageSidecar(tmp_path / "images")
    first = sidecar.resolve(str(picked), 1)

    assert sidecar.is_owned(first)
    assert sidecar.is_owned(first, 1)
    assert not sidecar.is_owned(first, 2)

    second = sidecar.resolve(first, 2)
    assert second == str(tmp_path / "images" / "contact_2.jpg")
    sidecar.delete(1)
    assert (tmp_path / "images" / "contact_2.jpg").read_bytes() == b"1"
