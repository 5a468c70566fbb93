import pytest

from newsdesk.modules.accounts import (
    Account,
    PermissionDeniedError,
    Role,
    has_role,
    require_admin,
    require_role,
    require_super_admin,
)


def _account(role: Role) -> Account:
    return Account(
        id=f"{role.value}-id",
        username=role.value,
        email=f"{role.value}@newsapp.com",
        role=role,
        is_active=True,
        password_hash="x",
    )


@pytest.mark.parametrize(
    "role, required, expected",
    [
        (Role.USER, Role.USER, True),
        (Role.USER, Role.ADMIN, False),
        (Role.USER, Role.SUPER_ADMIN, False),
        (Role.ADMIN, Role.USER, True),
        (Role.ADMIN, Role.ADMIN, True),
        (Role.ADMIN, Role.SUPER_ADMIN, False),
        (Role.SUPER_ADMIN, Role.USER, True),
        (Role.SUPER_ADMIN, Role.ADMIN, True),
        (Role.SUPER_ADMIN, Role.SUPER_ADMIN, True),
    ],
)
def test_role_hierarchy(role, required, expected):
    assert role.includes(required) is expected
    assert has_role(_account(role), required.value) is expected


def test_require_admin_accepts_admin_and_super_admin():
    require_admin(_account(Role.ADMIN))
    require_admin(_account(Role.SUPER_ADMIN))

    with pytest.raises(PermissionDeniedError) as excinfo:
        require_admin(_account(Role.USER))
    assert excinfo.value.account_id == "user-id"
    assert "Admin privileges required" in str(excinfo.value)


def test_require_super_admin_rejects_admin():
    require_super_admin(_account(Role.SUPER_ADMIN))

    for role in (Role.ADMIN, Role.USER):
        with pytest.raises(PermissionDeniedError):
            require_super_admin(_account(role))


def test_require_role_rejects_unknown_role_names():
    with pytest.raises(ValueError):
        require_role(_account(Role.SUPER_ADMIN), "editor")


def test_account_helpers_follow_hierarchy():
    assert _account(Role.SUPER_ADMIN).is_admin()
    assert _account(Role.ADMIN).is_admin()
    assert not _account(Role.ADMIN).is_super_admin()
    assert not _account(Role.USER).is_admin()
