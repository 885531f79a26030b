from row_sequencer.reconcile import ReconciliationReport


def test_report_records_bounded_examples():
    report = ReconciliationReport(start_id=1, example_limit=2)
    report.record(row=2, previous="x", corrected=1)
    report.record(row=3, previous=None, corrected=2)
    report.record(row=4, previous=9, corrected=3)

    assert report.rows_corrected == 3
    assert len(report.examples) == 2
    assert not report.is_clean()

def test_summary_and_dict():
    report = ReconciliationReport(start_id=1, rows_scanned=4, batches_written=1, final_id=4)
    report.record(row=3, previous="x", corrected=2)

    assert report.summary() == "Reconciled 4 row(s) in 1 batch(es): 1 corrected, final id 4"
    assert report.to_dict()["examples"] == [{"row": 3, "previous": "x", "corrected": 2}]

def test_clean_report():
    assert ReconciliationReport(start_id=1).is_clean()
