import pytest

from staffrank.components.avatars.service import cleanup_previous_avatars, save_avatar
from staffrank.components.grading.roles import StaffRole
from staffrank.components.grading.types import StaffDraft
from staffrank.components.staff.directory import StaffDirectory
from staffrank.errors import ValidationError


PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"0" * 32


def test_save_avatar_writes_under_role_folder(avatar_dir):
    url = save_avatar("abc", StaffRole.BUILDER, "me.PNG", PNG_BYTES)
    assert url.startswith("/static/staff_images/builder/staff-abc-")
    assert url.endswith(".png")
    stored = list((avatar_dir / "builder").iterdir())
    assert len(stored) == 1
    assert stored[0].read_bytes() == PNG_BYTES


@pytest.mark.parametrize(
    "filename,content",
    [
        ("notes.txt", PNG_BYTES),
        ("", PNG_BYTES),
        ("empty.png", b""),
    ],
)
def test_save_avatar_rejects_bad_uploads(avatar_dir, filename, content):
    with pytest.raises(ValidationError):
        save_avatar("abc", StaffRole.MODERATOR, filename, content)


def test_save_avatar_rejects_oversized_files(avatar_dir, monkeypatch):
    from staffrank.platform.config import settings

    monkeypatch.setattr(settings, "AVATAR_MAX_BYTES", 10)
    with pytest.raises(ValidationError, match="smaller"):
        save_avatar("abc", StaffRole.MODERATOR, "big.png", PNG_BYTES)


def test_cleanup_keeps_only_the_current_avatar(avatar_dir):
    folder = avatar_dir / "moderator"
    folder.mkdir()
    for ms in (1000, 2000, 3000):
        (folder / f"staff-abc-{ms}.png").write_bytes(PNG_BYTES)
    (folder / "staff-other-1000.png").write_bytes(PNG_BYTES)

    removed = cleanup_previous_avatars("abc", keep="/static/staff_images/moderator/staff-abc-2000.png")
    assert removed == 2
    assert sorted(p.name for p in folder.iterdir()) == ["staff-abc-2000.png", "staff-other-1000.png"]


def test_cleanup_without_current_file_keeps_newest(avatar_dir):
    folder = avatar_dir / "builder"
    folder.mkdir()
    for ms in (1000, 2000):
        (folder / f"staff-xyz-{ms}.jpg").write_bytes(PNG_BYTES)
    assert cleanup_previous_avatars("xyz", keep=None) == 1
    assert [p.name for p in folder.iterdir()] == ["staff-xyz-2000.jpg"]


def test_cleanup_with_no_storage_dir_is_a_noop(avatar_dir):
    assert cleanup_previous_avatars("nobody") == 0


def test_directory_update_reclaims_old_avatars(db, avatar_dir):
    directory = StaffDirectory(db)
    staff = directory.create(StaffDraft(name="Pic", role=StaffRole.MODERATOR))
    first_url = save_avatar(staff.id, StaffRole.MODERATOR, "a.png", PNG_BYTES)
    directory.set_avatar(staff.id, StaffRole.MODERATOR, first_url)
    # Distinct timestamp in the stored name
    (avatar_dir / "moderator" / f"staff-{staff.id}-1.png").write_bytes(PNG_BYTES)

    updated = directory.set_avatar(staff.id, StaffRole.MODERATOR, first_url)
    assert updated.avatar == first_url
    remaining = [p.name for p in (avatar_dir / "moderator").iterdir()]
    assert remaining == [first_url.rsplit("/", 1)[-1]]
