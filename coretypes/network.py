"""Network versions at which actor behaviour may change."""

from enum import IntEnum


class Version(IntEnum):
    """Enumeration of network upgrades."""

    VERSION_0 = 0  # genesis
    VERSION_1 = 1  # breeze
    VERSION_2 = 2  # smoke
    VERSION_3 = 3  # ignition
    VERSION_4 = 4  # actors v2
    VERSION_5 = 5  # tape
    VERSION_6 = 6  # kumquat
    VERSION_7 = 7  # calico
    VERSION_8 = 8  # persian
    VERSION_9 = 9  # orange
    VERSION_10 = 10  # trust
    VERSION_11 = 11  # norwegian
    VERSION_12 = 12  # turbo
    VERSION_13 = 13  # hyperdrive
    VERSION_14 = 14  # chocolate
    VERSION_15 = 15  # OhSnap
    VERSION_16 = 16  # Skyr
    VERSION_17 = 17  # Shark
    VERSION_18 = 18  # Hygge
    VERSION_19 = 19  # Lightning
    VERSION_20 = 20  # Thunder
    VERSION_21 = 21  # Watermelon
    VERSION_22 = 22  # Dragon
    VERSION_23 = 23  # TBD

    MAX = 2**32 - 1