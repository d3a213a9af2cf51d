from sysgpio.utils.consts import MAX_DRIVE_DEPTH, POLL_FOREVER, SysfsConsts


def test_sysfs_layout():
    assert SysfsConsts.BASE_PATH == "/sys/class/gpio"
    assert SysfsConsts.PIN_DIR_TEMPLATE.format(number=17) == "gpio17"
    assert SysfsConsts.ATTR_VALUE == "value"


def test_poll_forever_is_negative():
    assert POLL_FOREVER < 0


def test_max_drive_depth_positive():
    assert MAX_DRIVE_DEPTH > 0
