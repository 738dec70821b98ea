from shubharambh.models import Role


def test_register_login_and_verify(client):
    response = client.post('/auth/register', json={
        'name': 'Neha Gupta', 'email': 'Neha@Example.com', 'password': 'secret1'
    })
    assert response.status_code == 201
    body = response.get_json()
    assert body['user']['email'] == 'neha@example.com'
    assert body['user']['role'] == 'user'

    response = client.post('/auth/login', json={'email': 'neha@example.com', 'password': 'secret1'})
    assert response.status_code == 200
    token = response.get_json()['access_token']

    response = client.get('/auth/verify', headers={'Authorization': f'Bearer {token}'})
    assert response.status_code == 200
    assert response.get_json()['user']['name'] == 'Neha Gupta'


def test_register_rejects_duplicate_and_short_password(client, make_user):
    make_user(email='asha@example.com')

    response = client.post('/auth/register', json={
        'name': 'Asha', 'email': 'ASHA@example.com', 'password': 'secret1'
    })
    assert response.status_code == 409

    response = client.post('/auth/register', json={
        'name': 'New', 'email': 'new@example.com', 'password': '123'
    })
    assert response.status_code == 400
    assert response.get_json()['error'] == 'validation'


def test_login_does_not_reveal_unknown_email(client, make_user):
    make_user()
    wrong_password = client.post('/auth/login', json={'email': 'asha@example.com', 'password': 'nope123'})
    unknown = client.post('/auth/login', json={'email': 'ghost@example.com', 'password': 'nope123'})
    assert wrong_password.status_code == unknown.status_code == 401
    assert wrong_password.get_json()['message'] == unknown.get_json()['message']


def test_profile_update(client, make_user, auth_headers):
    user = make_user()
    response = client.put('/users/me', json={'phone': '9000000001'}, headers=auth_headers(user))
    assert response.status_code == 200
    assert response.get_json()['user']['phone'] == '9000000001'


def test_protected_endpoints_need_a_token(client):
    assert client.get('/quotes').status_code == 401
    assert client.get('/admin/stats').status_code == 401
    assert client.get('/auth/verify').status_code == 401


def test_admin_endpoints_refuse_user_tokens(client, make_user, auth_headers, admin_headers):
    user = make_user()
    assert client.get('/admin/stats', headers=auth_headers(user)).status_code == 403

    response = client.get('/admin/stats', headers=admin_headers)
    assert response.status_code == 200


def test_admin_login_with_wrong_password(client):
    response = client.post('/admin/login', json={'password': 'guess'})
    assert response.status_code == 401


def test_user_endpoints_refuse_admin_tokens(client, admin_headers):
    assert client.get('/quotes', headers=admin_headers).status_code == 401


def test_quote_round_trip_over_http(client, make_user, make_vendor, make_venue, auth_headers, future_date, outbox):
    customer = make_user(name='Priya Sharma', email='priya@example.com')
    vendor_user = make_user(name='Ravi Kumar', email='vendor@example.com', role=Role.VENDOR)
    vendor = make_vendor(user=vendor_user)
    venue = make_venue(vendor)

    response = client.post('/quotes', headers=auth_headers(customer), json={
        'venueId': venue.id,
        'eventType': 'wedding',
        'location': 'Hyderabad',
        'eventDate': future_date,
        'attendees': 250,
        'requirements': 'Evening reception',
    })
    assert response.status_code == 201
    quote_request_id = response.get_json()['quoteRequestId']

    response = client.get('/vendors/quotes', headers=auth_headers(vendor_user))
    assert [qr['id'] for qr in response.get_json()] == [quote_request_id]

    response = client.post(f'/vendors/quotes/{quote_request_id}/accept', headers=auth_headers(vendor_user),
                           json={'message': 'Dates are open, call us'})
    assert response.status_code == 200

    response = client.post(f'/vendors/quotes/{quote_request_id}/reject', headers=auth_headers(vendor_user),
                           json={'reason': 'Changed my mind'})
    assert response.status_code == 409

    response = client.get('/quotes', headers=auth_headers(customer))
    quote_request = response.get_json()[0]
    assert quote_request['vendorResponse']['status'] == 'accepted'
    assert quote_request['vendorResponse']['message'] == 'Dates are open, call us'
    assert any(mail['to'] == 'priya@example.com' for mail in outbox)


def test_dashboards(client, make_user, make_vendor, make_venue, auth_headers):
    customer = make_user()
    vendor_user = make_user(name='Ravi Kumar', email='vendor@example.com', role=Role.VENDOR)
    make_venue(make_vendor(user=vendor_user))

    response = client.get('/dashboard', headers=auth_headers(customer))
    assert response.status_code == 200
    body = response.get_json()
    assert body['role'] == 'user'
    assert body['user'] == {'quoteRequests': [], 'appointments': []}
    assert 'vendor' not in body

    assert client.get('/dashboard/vendor', headers=auth_headers(customer)).status_code == 403

    response = client.get('/dashboard/vendor', headers=auth_headers(vendor_user))
    assert response.status_code == 200
    body = response.get_json()
    assert len(body['listings']) == 1
    assert body['stats']['totalEnquiries'] == 0


def test_api_docs_are_served(client):
    assert client.get('/swagger.json').status_code == 200
