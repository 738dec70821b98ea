from types import SimpleNamespace
import pytest
from shubharambh.services import chat_service
from shubharambh.services.chat_service import (detect_intent, extract_city, extract_category, extract_event_type,
                                               extract_capacity_hint, extract_budget_hint, build_context)


class StubCompletions:
    def __init__(self, reply='Namaste! Here are some venues.', error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=self.reply))])


@pytest.fixture
def completions(app):
    stub = StubCompletions()
    app.extensions['chat_client'] = SimpleNamespace(chat=SimpleNamespace(completions=stub))
    return stub


def test_message_analysis():
    message = 'Need a banquet hall in Gachibowli for 300 guests under 5 lakh for my sangeet'
    assert {'venue_search', 'pricing', 'capacity'} <= set(detect_intent(message))
    assert extract_city(message) == 'hyderabad'
    assert extract_category(message) == 'venues'
    assert extract_event_type(message) == 'sangeet'
    assert extract_capacity_hint(message) == (250, 400)
    assert extract_budget_hint(message) == (0, 500000)
    assert detect_intent('namaste') == ['general']
    assert extract_budget_hint('between 2 to 4 lakh') == (200000, 400000)
    assert extract_capacity_hint('an intimate gathering') == (1, 100)


def test_context_lists_only_live_listings(make_vendor, make_venue):
    from shubharambh.models import ListingStatus
    vendor = make_vendor()
    make_venue(vendor, name='Lotus Hall', city='Hyderabad', event_types=['wedding', 'sangeet'])
    make_venue(vendor, name='Hidden Hall', city='Hyderabad', status=ListingStatus.PENDING, is_available=False)

    message = 'show me a hall in hyderabad for a wedding'
    context = build_context(message, detect_intent(message))

    assert 'PLATFORM STATS: 1 verified venues/services, 1 verified vendors, 13 categories.' in context
    assert 'Name="Lotus Hall"' in context
    assert 'Hidden Hall' not in context
    assert 'IN HYDERABAD: 1 listings across: venues' in context


def test_reply_sends_context_with_last_user_message(completions, make_vendor, make_venue):
    make_venue(make_vendor(), name='Lotus Hall')
    messages = [{'role': 'assistant', 'content': f'turn {i}'} for i in range(12)]
    messages.append({'role': 'user', 'content': 'Any venues in Hyderabad?'})

    data, error, status = chat_service.chat_reply(messages)

    assert status == 200
    assert data == {'message': 'Namaste! Here are some venues.'}
    call = completions.calls[0]
    assert call['model'] == 'llama-3.3-70b-versatile'
    assert call['max_tokens'] == 500
    assert call['messages'][0]['role'] == 'system'
    assert len(call['messages']) == 11
    assert call['messages'][-1]['content'].endswith('[USER MESSAGE]\nAny venues in Hyderabad?')
    assert 'Lotus Hall' in call['messages'][-1]['content']


def test_reply_without_key_or_client(app):
    data, _, status = chat_service.chat_reply([{'role': 'user', 'content': 'hi'}])
    assert status == 200
    assert data['message'] == chat_service.NO_KEY_REPLY


def test_reply_on_provider_error(completions):
    completions.error = RuntimeError('rate limited')
    data, _, status = chat_service.chat_reply([{'role': 'user', 'content': 'hi'}])
    assert status == 200
    assert data['message'] == chat_service.ERROR_REPLY


def test_chat_endpoint(client, completions):
    response = client.post('/chat', json={'messages': [{'role': 'user', 'content': 'hello'}]})
    assert response.status_code == 200
    assert response.get_json() == {'message': 'Namaste! Here are some venues.'}
