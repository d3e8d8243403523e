"""Connection tracking (netfilter) counter models."""

from __future__ import annotations

from pydantic import Field, NonNegativeInt

from hostnet.models._base import SnapshotModel


class FilterStat(SnapshotModel):
    """Tracked connection count and its configured maximum.

    A ``conn_track_max`` of 0 means the subsystem is unsupported, not unlimited.
    """

    conn_track_count: NonNegativeInt = Field(default=0, alias="connTrackCount")
    conn_track_max: NonNegativeInt = Field(default=0, alias="connTrackMax")


class ConntrackStat(SnapshotModel):
    """Conntrack statistics of one CPU, or the sum over all CPUs."""

    entries: NonNegativeInt = 0
    searched: NonNegativeInt = 0
    found: NonNegativeInt = 0
    new: NonNegativeInt = 0
    invalid: NonNegativeInt = 0
    ignore: NonNegativeInt = 0
    delete: NonNegativeInt = 0
    delete_list: NonNegativeInt = Field(default=0, alias="deleteList")
    insert: NonNegativeInt = 0
    insert_failed: NonNegativeInt = Field(default=0, alias="insertFailed")
    drop: NonNegativeInt = 0
    early_drop: NonNegativeInt = Field(default=0, alias="earlyDrop")
    icmp_error: NonNegativeInt = Field(default=0, alias="icmpError")
    expect_new: NonNegativeInt = Field(default=0, alias="expectNew")
    expect_create: NonNegativeInt = Field(default=0, alias="expectCreate")
    expect_delete: NonNegativeInt = Field(default=0, alias="expectDelete")
    search_restart: NonNegativeInt = Field(default=0, alias="searchRestart")
