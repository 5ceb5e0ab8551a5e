from import_engine.report import ImportReport, ImportStats, TableReport, format_bytes


def test_stats_merge_and_success_rate():
    total = ImportStats()
    total.merge(ImportStats(processed=3, inserted=2, errors=1))
    total.merge(ImportStats(processed=1, updated=1, skipped=4))

    assert total.to_dict() == {
        "processed": 4, "inserted": 2, "updated": 1, "errors": 1, "skipped": 4,
    }
    assert total.success_rate == 75.0
    assert ImportStats().success_rate == 0.0


def test_report_aggregates_tables():
    report = ImportReport()
    report.add_table(TableReport("CLIENTS", stats=ImportStats(processed=2, inserted=2)))
    report.add_table(TableReport("PROJECTS", stats=ImportStats(processed=1, errors=1)))

    assert report.stats.processed == 3
    assert not report.success
    assert list(report.to_dict()["tables"]) == ["CLIENTS", "PROJECTS"]


def test_format_bytes():
    assert format_bytes(0) == "0.00 B"
    assert format_bytes(512) == "512.00 B"
    assert format_bytes(1536) == "1.50 KB"
    assert format_bytes(3 * 1024 * 1024) == "3.00 MB"
