from __future__ import annotations

from admin.ui_blueprint import assignable_admins
from conftest import envelope

ANNA = {"_id": "a1", "name": "Anna", "email": "anna@x.test", "role": "admin"}
BORIS = {"_id": "a2", "name": "Boris", "email": "boris@x.test", "role": "admin"}
CLARA = {"_id": "a3", "name": "Clara", "email": "clara@x.test", "role": "admin"}

W1 = {"_id": "w1", "name": "Seaside Hotel", "domain": "seaside.test", "isActive": True, "assignedAdmin": ANNA}
W2 = {"_id": "w2", "name": "Mountain Lodge", "domain": "mountain.test", "isActive": True, "assignedAdmin": BORIS}
W3 = {"_id": "w3", "name": "City Inn", "domain": "city.test", "isActive": False, "uniqueId": "uid-333"}


def test_assignable_admins_excludes_admins_taken_elsewhere():
    admins = [ANNA, BORIS, CLARA]
    websites = [W1, W2, W3]
    assert [a["_id"] for a in assignable_admins(admins, websites, W1)] == ["a1", "a3"]
    assert [a["_id"] for a in assignable_admins(admins, websites, W3)] == ["a3"]


def test_list_renders_websites(as_super_admin, http):
    http.add("GET", "/websites", 200, envelope(websites=[W1, W2, W3]))
    html = as_super_admin.get("/dashboard/websites").get_data(as_text=True)
    assert "Seaside Hotel" in html and "City Inn" in html
    assert "uid-333" in html
    assert "No admin assigned" in html


def test_assign_modal_lists_only_free_admins(as_super_admin, http):
    http.add("GET", "/websites", 200, envelope(websites=[W1, W2, W3]))
    http.add("GET", "/users", 200, envelope(users=[ANNA, BORIS, CLARA]))
    html = as_super_admin.get("/dashboard/websites?modal=assign&id=w1").get_data(as_text=True)
    assert http.last("GET", "/users")["params"] == {"role": "admin"}
    assert 'value="a1" selected' in html
    assert 'value="a3"' in html
    assert 'value="a2"' not in html


def test_assign_admin_posts_patch(as_super_admin, http):
    resp = as_super_admin.post("/dashboard/websites/w3/assign-admin", data={"admin_id": "a3", "website_name": "City Inn"})
    assert resp.status_code == 302
    assert http.last("PATCH", "/websites/w3/assign-admin")["json"] == {"adminId": "a3"}


def test_unassign_sends_null(as_super_admin, http):
    as_super_admin.post("/dashboard/websites/w1/assign-admin", data={"admin_id": ""})
    assert http.last("PATCH", "/websites/w1/assign-admin")["json"] == {"adminId": None}


def test_create_website(as_super_admin, http):
    http.add("POST", "/websites", 201, envelope(website={"_id": "w9", "name": "New Hotel"}))
    resp = as_super_admin.post("/dashboard/websites", data={"name": "New Hotel", "domain": "new.test", "subdomain": ""})
    assert resp.status_code == 302
    assert http.last("POST", "/websites")["json"] == {
        "name": "New Hotel",
        "domain": "new.test",
        "subdomain": "",
        "theme": "default",
    }


def test_create_website_requires_name_and_domain(as_super_admin, http):
    resp = as_super_admin.post("/dashboard/websites", data={"name": "", "domain": ""})
    assert "modal=create" in resp.headers["Location"]
    assert "POST" not in [c["method"] for c in http.calls]


def test_edit_website(as_super_admin, http):
    http.add("PUT", "/websites/w2", 200, envelope(website={**W2, "name": "Alpine Lodge"}))
    as_super_admin.post("/dashboard/websites/w2/edit", data={"name": "Alpine Lodge", "domain": "mountain.test"})
    assert http.last("PUT", "/websites/w2")["json"]["name"] == "Alpine Lodge"


def test_delete_current_website_reassigns_selection(as_super_admin, http):
    http.add("GET", "/websites", 200, envelope(websites=[W1, W2, W3]))
    as_super_admin.get("/dashboard/websites")
    as_super_admin.post("/dashboard/websites/w1/delete")
    assert http.last("DELETE", "/websites/w1")
    with as_super_admin.session_transaction() as sess:
        assert '"_id":"w2"' in sess["website-storage"]


def test_switch_website(as_super_admin, http):
    http.add("POST", "/websites/w3/switch", 200, envelope(website=W3))
    as_super_admin.post("/dashboard/websites/w3/switch")
    with as_super_admin.session_transaction() as sess:
        assert '"_id":"w3"' in sess["website-storage"]
