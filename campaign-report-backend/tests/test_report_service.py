from app.integrations import ReportNotFoundError, StoreAccessDeniedError
from app.models.db.enums import ActionStatus, NotificationType
from app.services.report_service import CONNECTION_ERROR_MESSAGE, ReportService


def _service(store, fixed_day):
    return ReportService(store, clock=lambda: fixed_day)


def test_save_update_list_load_cycle(report_store, form_factory, fixed_day):
    service = _service(report_store, fixed_day)
    form = form_factory()

    saved = service.save_as_new(form)
    assert saved.ok
    assert saved.report_name == "[Acme] - [January-Mar 2025] - [07-APR-2025]"
    assert saved.notification.message == 'Report "[Acme] - [January-Mar 2025] - [07-APR-2025]" saved successfully!'
    assert saved.notification.type == NotificationType.SUCCESS
    assert [r.id for r in saved.reports] == [saved.report_id]

    changed = form.model_copy(update={"brand_name": "Acme Corp"})
    updated = service.update(saved.report_id, changed)
    assert updated.ok
    assert updated.report_name.startswith("[Acme Corp]")
    assert updated.notification.message.endswith("updated successfully!")

    listed = service.list_reports()
    assert listed.notification.message == "Successfully fetched 1 report(s)."
    assert listed.reports[0].name == updated.report_name

    loaded = service.load(saved.report_id)
    assert loaded.ok
    assert loaded.form.brand_name == "Acme Corp"
    assert loaded.notification.message == f'Report "{updated.report_name}" loaded successfully!'
    assert [p.name for p in loaded.form.platforms] == ["Meta", "TikTok"]
    assert {p.id for p in loaded.form.platforms}.isdisjoint({p.id for p in form.platforms})


def test_empty_list_is_info(report_store, fixed_day):
    result = _service(report_store, fixed_day).list_reports()
    assert result.ok
    assert result.reports == []
    assert result.notification.type == NotificationType.INFO


def test_blank_brand_fails_validation_without_store_call(failing_store_factory, form_factory, fixed_day):
    store = failing_store_factory()
    service = _service(store, fixed_day)

    result = service.save_as_new(form_factory(brand_name="", start_month="January"))
    assert result.status == ActionStatus.VALIDATION_FAILED
    assert result.notification.message == "Brand Name and Start Month are required."

    result = service.update("abc", form_factory(start_month=""))
    assert result.status == ActionStatus.VALIDATION_FAILED
    assert store.calls == []


def test_not_configured_actions(form_factory, fixed_day):
    service = _service(None, fixed_day)
    assert service.configured is False

    listed = service.list_reports()
    assert listed.status == ActionStatus.NOT_CONFIGURED
    assert listed.notification.type == NotificationType.INFO

    saved = service.save_as_new(form_factory())
    assert saved.status == ActionStatus.NOT_CONFIGURED
    assert saved.notification.message == "Report store is not configured. Cannot save."
    assert service.load("abc").notification.message == "Report store is not configured. Cannot load."


def test_unavailable_store_gives_connection_error(failing_store_factory, form_factory, fixed_day):
    service = _service(failing_store_factory(), fixed_day)
    for result in (service.list_reports(), service.save_as_new(form_factory()), service.load("abc")):
        assert result.status == ActionStatus.UNAVAILABLE
        assert result.notification.message == CONNECTION_ERROR_MESSAGE
        assert result.notification.type == NotificationType.ERROR


def test_denied_and_not_found(failing_store_factory, form_factory, fixed_day):
    denied = _service(failing_store_factory(StoreAccessDeniedError("rules")), fixed_day)
    result = denied.save_as_new(form_factory())
    assert result.status == ActionStatus.DENIED
    assert result.notification.message == "Failed to save report. Check report store access rules."

    missing = _service(failing_store_factory(ReportNotFoundError("abc")), fixed_day)
    result = missing.load("abc")
    assert result.status == ActionStatus.NOT_FOUND
    assert result.notification.message == "Report not found."


def test_update_without_report_id(report_store, form_factory, fixed_day):
    result = _service(report_store, fixed_day).update("", form_factory())
    assert result.status == ActionStatus.NOT_FOUND
    assert report_store.list() == []


def test_read_only_store_denies_save(read_only_store, form_factory, fixed_day):
    result = _service(read_only_store, fixed_day).save_as_new(form_factory())
    assert result.status == ActionStatus.DENIED


def test_failed_save_leaves_form_unchanged(failing_store_factory, form_factory, fixed_day):
    form = form_factory()
    before = form.model_dump()
    _service(failing_store_factory(), fixed_day).save_as_new(form)
    assert form.model_dump() == before


def test_generate_dashboard_does_not_touch_store(failing_store_factory, form_factory, fixed_day):
    store = failing_store_factory()
    result = _service(store, fixed_day).generate_dashboard(form_factory())
    assert store.calls == []
    assert result.html.startswith("<!DOCTYPE html>")
    assert result.reporting_period == "January - March 2025"
    assert result.first_active_month_index == 1
    assert result.overall_results.total_impressions == 150000
    assert result.overall_results.total_clicks == 1500


def test_load_malformed_document_is_reported(report_store, stored_document, malformed_document, fixed_day):
    stored_document("bad", malformed_document)
    result = _service(report_store, fixed_day).load("bad")
    assert result.status == ActionStatus.CORRUPT
    assert result.form is None
    assert result.notification.type == NotificationType.ERROR
    assert result.notification.message == "Failed to load report. Stored data is invalid."
