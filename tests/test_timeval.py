import pytest

from oldkern.timeval import FD_SETSIZE, FdSet, Timeval, isleap


def test_is_set():
    assert not Timeval().is_set()
    assert Timeval(1, 0).is_set()
    assert Timeval(0, 1).is_set()


def test_ordering():
    assert Timeval(1, 999999) < Timeval(2, 0)
    assert Timeval(1, 5) < Timeval(1, 6)
    assert Timeval(3, 0) > Timeval(2, 7)
    assert Timeval(2, 7) == Timeval(2, 7)


def test_fd_set_and_clear():
    fds = FdSet()
    fds.set(3)
    fds.set(FD_SETSIZE - 1)
    assert fds.isset(3)
    assert fds.isset(FD_SETSIZE - 1)
    assert not fds.isset(0)
    fds.clear(3)
    assert not fds.isset(3)
    assert fds.isset(FD_SETSIZE - 1)


def test_fd_zero():
    fds = FdSet()
    for fd in range(FD_SETSIZE):
        fds.set(fd)
    assert all(fds.isset(fd) for fd in range(FD_SETSIZE))
    fds.zero()
    assert not any(fds.isset(fd) for fd in range(FD_SETSIZE))
    assert fds.mask == 0


@pytest.mark.parametrize("bad", [-1, FD_SETSIZE])
def test_fd_out_of_range(bad):
    with pytest.raises(ValueError):
        FdSet().set(bad)


@pytest.mark.parametrize("year", [1996, 2000, 2004])
def test_leap_years(year):
    assert isleap(year) is True


@pytest.mark.parametrize("year", [1900, 2001, 2100])
def test_common_years(year):
    assert isleap(year) is False