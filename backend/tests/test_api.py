"""HTTP tests for the API surface."""

import json

import pytest

from als.store.local import Keys


@pytest.mark.integration
@pytest.mark.asyncio
class TestHealth:
    async def test_health(self, client):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    async def test_ready_local_only(self, client):
        response = await client.get("/health/ready")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["checks"]["local_store"] == "ok"
        assert body["checks"]["cloud"] == "disabled"

    async def test_system_status(self, client):
        response = await client.get("/api/system/status")
        assert response.json() == {
            "cloudConfigured": False, "online": False, "lastError": None, "lastSyncAt": None,
        }


@pytest.mark.integration
@pytest.mark.asyncio
class TestRegistries:
    @pytest.mark.parametrize("path,body", [
        ("/api/drivers/", {"name": "JOÃO", "cpf": "123.456.789-01", "plateHorse": "ABC-1D23"}),
        ("/api/customers/", {"name": "OWENS", "cnpj": "12.345.678/0001-95", "operations": ["Mercosul"]}),
        ("/api/ports/", {"name": "BTP", "city": "SANTOS", "state": "SP"}),
        ("/api/pre-stacking/", {"name": "PÁTIO", "city": "SANTOS", "state": "SP"}),
        ("/api/users/", {"username": "ana", "role": "admin"}),
        ("/api/categories/", {"name": "Aliança"}),
    ])
    async def test_crud(self, client, path, body):
        created = await client.post(path, json=body)
        assert created.status_code == 201
        record = created.json()
        assert record["id"]
        for key, value in body.items():
            assert record[key] == value

        listed = await client.get(path)
        assert listed.json() == [record]

        updated = await client.put(f"{path}{record['id']}", json={**record, "name" if "name" in body else "username": "CHANGED"})
        assert updated.status_code == 200
        assert updated.json()["id"] == record["id"]
        assert len((await client.get(path)).json()) == 1

        deleted = await client.delete(f"{path}{record['id']}")
        assert deleted.status_code == 204
        assert (await client.get(path)).json() == []

    async def test_new_customer_gets_default_operations(self, client):
        response = await client.post("/api/customers/", json={"name": "VOLKSWAGEN DO BRASIL"})
        assert response.json()["operations"] == ["Aliança"]

    async def test_validation_error(self, client):
        response = await client.post("/api/drivers/", json={"cpf": "123"})
        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    async def test_delete_driver_removes_user(self, client):
        driver = (await client.post("/api/drivers/", json={"name": "JOÃO SILVA", "cpf": "12345678901"})).json()
        access = await client.post(f"/api/drivers/{driver['id']}/access")
        assert access.json() == {"username": "12345678901", "password": "joão8901"}
        assert len((await client.get("/api/users/")).json()) == 1

        await client.delete(f"/api/drivers/{driver['id']}")
        assert (await client.get("/api/users/")).json() == []

    async def test_driver_access_flow(self, client):
        driver = (await client.post("/api/drivers/", json={"name": "ANA", "cpf": "98765432100"})).json()

        granted = await client.post(f"/api/drivers/{driver['id']}/access", json={"password": "first"})
        assert granted.json()["password"] == "first"
        saved = (await client.get("/api/drivers/")).json()[0]
        assert saved["hasAccess"] is True
        assert saved["generatedPassword"] == "first"

        changed = await client.put(f"/api/drivers/{driver['id']}/access", json={"password": "second"})
        assert changed.status_code == 200
        assert changed.json() == {"username": "98765432100", "password": "second"}
        assert (await client.get("/api/users/")).json()[0]["password"] == "second"

    async def test_access_for_unknown_driver(self, client):
        response = await client.post("/api/drivers/drv-missing/access")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "RESOURCE_NOT_FOUND"

    async def test_staff_with_password(self, client):
        response = await client.post("/api/staff/", json={"name": "ANA", "username": "ana", "password": "x"})
        assert response.status_code == 201
        assert "password" not in response.json()

        users = (await client.get("/api/users/")).json()
        assert users[0]["staffId"] == response.json()["id"]

    async def test_presence(self, client):
        user = (await client.post("/api/users/", json={"username": "ana"})).json()
        response = await client.post(f"/api/users/{user['id']}/presence", json={"isVisible": True})
        assert response.json()["isOnlineVisible"] is True
        assert (await client.post("/api/users/u-x/presence", json={"isVisible": True})).status_code == 404

    async def test_category_delete_removes_children(self, client):
        parent = (await client.post("/api/categories/", json={"name": "Aliança"})).json()
        await client.post("/api/categories/", json={"name": "VW", "parentId": parent["id"]})
        await client.post("/api/categories/", json={"name": "Mercosul"})

        await client.delete(f"/api/categories/{parent['id']}")
        assert [c["name"] for c in (await client.get("/api/categories/")).json()] == ["Mercosul"]

    async def test_category_checks_on_create_and_update(self, client):
        own_parent = await client.post("/api/categories/", json={"id": "cat-1", "name": "A", "parentId": "cat-1"})
        assert own_parent.status_code == 422
        assert own_parent.json()["error"]["code"] == "VALIDATION_FAILED"

        blank = await client.post("/api/categories/", json={"name": "  "})
        assert blank.status_code == 422

        category = (await client.post("/api/categories/", json={"name": "Aliança"})).json()
        renamed = await client.put(f"/api/categories/{category['id']}", json={**category, "name": "  "})
        assert renamed.status_code == 422
        assert renamed.json()["error"]["code"] == "VALIDATION_FAILED"
        reparented = await client.put(
            f"/api/categories/{category['id']}", json={**category, "parentId": category["id"]}
        )
        assert reparented.status_code == 422
        assert (await client.get("/api/categories/")).json() == [category]


@pytest.mark.integration
@pytest.mark.asyncio
class TestTrips:
    async def test_duplicate_os_conflict(self, client):
        first = await client.post("/api/trips/", json={"os": "SP123456A"})
        assert first.status_code == 201

        second = await client.post("/api/trips/", json={"os": "sp123456a"})
        assert second.status_code == 409
        error = second.json()["error"]
        assert error["code"] == "DUPLICATE_RECORD"
        assert error["details"]["existing"]["id"] == first.json()["id"]

    async def test_filter_by_category(self, client):
        await client.post("/api/trips/", json={"os": "A1", "category": "Aliança", "subCategory": "VW"})
        await client.post("/api/trips/", json={"os": "M1", "category": "Mercosul"})

        assert [t["os"] for t in (await client.get("/api/trips/", params={"category": "aliança"})).json()] == ["A1"]
        assert [t["os"] for t in (await client.get("/api/trips/", params={"subCategory": "VW"})).json()] == ["A1"]

    async def test_status_and_payment_flow(self, client):
        trip = (await client.post("/api/trips/", json={"os": "SP123456A"})).json()
        base = f"/api/trips/{trip['id']}"

        status = await client.post(f"{base}/status", json={"status": "Retirada de vazio"})
        assert status.json()["status"] == "Retirada de vazio"
        assert len(status.json()["statusHistory"]) == 1

        early = await client.post(f"{base}/balance/release")
        assert early.status_code == 422
        assert early.json()["error"]["code"] == "ADVANCE_NOT_RELEASED"

        advance = await client.post(f"{base}/advance/release")
        assert advance.json()["advancePayment"]["status"] == "LIBERAR"

        blocked = await client.post(f"{base}/balance/release")
        assert blocked.json()["error"]["code"] == "DOCUMENTS_MISSING"

        queues = (await client.get("/api/trips/queues")).json()
        assert queues == {"pendingAdvances": 0, "pendingBalances": 1, "blockedBalances": 1}

        doc = await client.post(f"{base}/documents", json={"fileName": "docs.pdf", "url": "https://x/docs.pdf"})
        assert doc.status_code == 201
        assert doc.json()["documents"][0]["type"] == "COMPLETO"

        balance = await client.post(f"{base}/balance/release")
        assert balance.json()["balancePayment"]["status"] == "LIBERAR"

        paid = await client.post(f"{base}/balance/paid")
        assert paid.json()["balancePayment"]["status"] == "PAGO"
        assert paid.json()["balancePayment"]["paidDate"]

    async def test_forced_balance_release(self, client):
        trip = (await client.post("/api/trips/", json={"os": "SP123456A", "advancePayment": {"status": "PAGO"}})).json()
        response = await client.post(f"/api/trips/{trip['id']}/balance/release", params={"force": "true"})
        assert response.json()["balancePayment"]["status"] == "LIBERAR"

    async def test_unknown_trip(self, client):
        response = await client.post("/api/trips/trip-x/advance/release")
        assert response.status_code == 404


@pytest.mark.integration
@pytest.mark.asyncio
class TestForms:
    async def test_collection_order_sync_and_overwrite(self, client, driver, customer):
        form = {
            "os": "12alc1234567a",
            "container": "mscu1234567",
            "driverId": driver.id,
            "remetenteId": customer.id,
        }
        created = await client.post("/api/forms/collection-order", json=form)
        assert created.status_code == 200
        trip = created.json()
        assert trip["os"] == "12ALC1234567A"
        assert trip["category"] == "Aliança"
        assert trip["ocFormData"]["agencia"] == "MSC"

        conflict = await client.post("/api/forms/collection-order", json={**form, "ship": "msc anna"})
        assert conflict.status_code == 409
        assert conflict.json()["error"]["details"]["existing"]["id"] == trip["id"]

        overwritten = await client.post(
            "/api/forms/collection-order",
            params={"overwrite": "true"},
            json={**form, "ship": "msc anna"},
        )
        assert overwritten.status_code == 200
        assert overwritten.json()["id"] == trip["id"]
        assert overwritten.json()["ship"] == "MSC ANNA"

    async def test_collection_order_unknown_driver(self, client, customer):
        response = await client.post(
            "/api/forms/collection-order",
            json={"os": "SP123456A", "driverId": "drv-x", "remetenteId": customer.id},
        )
        assert response.status_code == 404

    @pytest.mark.parametrize("path,prefix", [
        ("/api/forms/collection-order/pdf", "OC - "),
        ("/api/forms/pre-stacking/pdf", "Minuta Pre-Stacking - "),
        ("/api/forms/empty-release/pdf", "LIBERA"),
        ("/api/forms/empty-return/pdf", "DEVOLU"),
    ])
    async def test_pdf(self, client, driver, path, prefix):
        response = await client.post(path, json={"driverId": driver.id, "container": "MSCU1234567"})
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.content.startswith(b"%PDF")
        disposition = response.headers["content-disposition"]
        assert disposition.startswith("attachment; filename*=UTF-8''")
        assert "JO%C3%83O%20DA%20SILVA" in disposition
        assert prefix.replace(" ", "%20") in disposition

    @pytest.mark.parametrize("path", ["/api/forms/empty-release/pdf", "/api/forms/empty-return/pdf"])
    async def test_pdf_with_typed_date(self, client, path):
        response = await client.post(path, json={"date": "05/03/2026"})
        assert response.status_code == 200
        assert response.content.startswith(b"%PDF")


@pytest.mark.integration
@pytest.mark.asyncio
class TestPreferencesAndBackup:
    async def test_preferences(self, client):
        assert (await client.get("/api/preferences/u-1")).json() == {"visibleColumns": {}}

        response = await client.put("/api/preferences/u-1", json={"componentId": "trips", "columns": ["os"]})
        assert response.json() == {"visibleColumns": {"trips": ["os"]}}

    async def test_export_then_import(self, client, storage, driver):
        exported = await client.get("/api/backup/export")
        assert exported.status_code == 200
        assert "ALS_BACKUP_" in exported.headers["content-disposition"]
        payload = exported.json()
        assert json.loads(payload[Keys.DRIVERS])[0]["id"] == driver.id

        await storage.delete_driver(driver.id)
        assert (await client.get("/api/drivers/")).json() == []

        restored = await client.post(
            "/api/backup/import",
            files={"file": ("backup.json", exported.content, "application/json")},
        )
        assert restored.status_code == 200
        assert Keys.DRIVERS in restored.json()["restoredKeys"]
        assert [d["id"] for d in (await client.get("/api/drivers/")).json()] == [driver.id]

    async def test_import_rejects_bad_file(self, client):
        response = await client.post(
            "/api/backup/import",
            files={"file": ("backup.json", b"not json", "application/json")},
        )
        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_FAILED"
