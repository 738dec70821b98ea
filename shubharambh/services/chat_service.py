# Shubhi, the chat concierge: keyword intents + marketplace context + an LLM reply
import logging
import re
from flask import current_app
from openai import OpenAI
from sqlalchemy import func
from .. import db
from ..categories import CATEGORIES
from ..models.vendor_model import Vendor
from ..models.venue_model import Venue
from ..models.status import ListingStatus
from .marketplace_service import visible_listings

logger = logging.getLogger(__name__)

NO_KEY_REPLY = "I'm having trouble connecting right now. Please try again in a moment! 🙏"
ERROR_REPLY = "Oops! I'm having a small hiccup right now 😅 Please try again in a moment!"
EMPTY_REPLY = "I couldn't process that right now. Could you try again? 🙏"

HISTORY_LIMIT = 10
MATCH_LIMIT = 8
BROADER_LIMIT = 5

INTENT_KEYWORDS = {
    'venue_search': ['venue', 'hall', 'banquet', 'place', 'location', 'farmhouse', 'lawn', 'resort', 'hotel',
                     'convention', 'mandap', 'marriage hall', 'function hall', 'find', 'search', 'show',
                     'suggest', 'recommend', 'looking for', 'need a', 'want a', 'best'],
    'pricing': ['price', 'cost', 'budget', 'expensive', 'cheap', 'affordable', 'rate', 'charges', 'how much',
                'pricing', 'per plate', 'starting from', 'range', '₹', 'rupees', 'lakh', 'thousand'],
    'location': ['hyderabad', 'mumbai', 'delhi', 'bangalore', 'bengaluru', 'chennai', 'kolkata', 'pune', 'jaipur',
                 'goa', 'noida', 'gurgaon', 'gurugram', 'navi mumbai', 'thane', 'secunderabad', 'jubilee hills',
                 'banjara hills', 'hitech city', 'gachibowli', 'shamshabad', 'kompally', 'kukatpally',
                 'ameerpet', 'begumpet', 'madhapur'],
    'category': ['decorator', 'decoration', 'dj', 'music', 'cater', 'food', 'photographer', 'photography', 'photo',
                 'video', 'makeup', 'bridal', 'mehendi', 'mehndi', 'henna', 'invitation', 'card', 'pandit',
                 'priest', 'puja', 'choreograph', 'dance', 'bridal wear', 'lehenga', 'sherwani', 'anchor', 'host',
                 'emcee', 'karaoke', 'singing'],
    'event_type': ['wedding', 'engagement', 'birthday', 'anniversary', 'reception', 'pre-wedding', 'mehendi',
                   'sangeet', 'haldi', 'bachelor', 'bridal shower', 'baby shower', 'party', 'function', 'event',
                   'celebration', 'ceremony'],
    'capacity': ['guest', 'people', 'person', 'capacity', 'attendee', 'seat', 'how many', 'small', 'large',
                 'intimate', 'grand', '100', '200', '300', '500', '1000'],
    'booking': ['book', 'reserve', 'available', 'availability', 'date', 'slot', 'enquiry', 'enquire', 'quote',
                'get quote', 'send enquiry', 'appointment', 'visit', 'schedule'],
    'comparison': ['compare', 'better', 'best', 'top', 'vs', 'versus', 'difference', 'which one', 'popular',
                   'rating', 'review', 'highly rated', 'most booked'],
    'amenities': ['parking', 'ac', 'air condition', 'wifi', 'swimming', 'pool', 'garden', 'outdoor', 'indoor',
                  'veg', 'non-veg', 'alcohol', 'dj allowed', 'fireworks', 'valet', 'power backup',
                  'changing room', 'bridal room'],
    'about': ['about', 'what is', 'how does', 'how do', 'shubharambh', 'platform', 'work', 'help', 'service',
              'what can you', 'who are you'],
}

CITIES = ['hyderabad', 'mumbai', 'delhi', 'bangalore', 'bengaluru', 'chennai', 'kolkata', 'pune', 'jaipur', 'goa',
          'noida', 'gurgaon', 'gurugram', 'secunderabad', 'navi mumbai', 'thane']

# Neighbourhoods that map back to their city
HYDERABAD_AREAS = ['jubilee hills', 'banjara hills', 'hitech city', 'gachibowli', 'shamshabad', 'kompally',
                   'kukatpally', 'ameerpet', 'begumpet', 'madhapur']

CATEGORY_KEYWORDS = [
    ('venue', 'venues'), ('hall', 'venues'), ('banquet', 'venues'), ('farmhouse', 'venues'), ('lawn', 'venues'),
    ('resort', 'venues'), ('marriage hall', 'venues'), ('function hall', 'venues'), ('mandap', 'venues'),
    ('decorator', 'decorators'), ('decoration', 'decorators'), ('decor', 'decorators'), ('flower', 'decorators'),
    ('floral', 'decorators'),
    ('dj', 'djs'), ('music', 'djs'), ('sound', 'djs'), ('band', 'djs'),
    ('cater', 'caterers'), ('food', 'caterers'), ('cuisine', 'caterers'), ('menu', 'caterers'),
    ('biryani', 'caterers'),
    ('photograph', 'photographers'), ('photo', 'photographers'), ('video', 'photographers'),
    ('camera', 'photographers'), ('shoot', 'photographers'),
    ('makeup', 'makeup'), ('mua', 'makeup'), ('stylist', 'makeup'),
    ('mehendi', 'mehendi'), ('mehndi', 'mehendi'), ('henna', 'mehendi'),
    ('invitation', 'invitations'), ('card', 'invitations'), ('invite', 'invitations'),
    ('pandit', 'pandits'), ('priest', 'pandits'), ('puja', 'pandits'), ('pooja', 'pandits'),
    ('choreograph', 'choreographers'), ('dance', 'choreographers'),
    ('lehenga', 'bridal-wear'), ('sherwani', 'bridal-wear'), ('bridal wear', 'bridal-wear'),
    ('wedding dress', 'bridal-wear'), ('outfit', 'bridal-wear'),
    ('anchor', 'anchoring'), ('host', 'anchoring'), ('emcee', 'anchoring'),
    ('karaoke', 'karaoke'), ('singing', 'karaoke'),
]

EVENT_KEYWORDS = [
    ('wedding', 'wedding'), ('shaadi', 'wedding'), ('marriage', 'wedding'),
    ('engagement', 'engagement'), ('ring ceremony', 'engagement'), ('sagai', 'engagement'),
    ('birthday', 'birthday'), ('bday', 'birthday'),
    ('anniversary', 'anniversary'),
    ('reception', 'wedding-reception'),
    ('pre-wedding', 'pre-wedding'), ('pre wedding', 'pre-wedding'),
    ('sangeet', 'sangeet'), ('haldi', 'pre-wedding'),
    ('bachelor', 'bachelor-party'),
    ('bridal shower', 'bridal-shower'),
    ('baby shower', 'baby-shower'),
]

SEARCH_INTENTS = {'venue_search', 'pricing', 'comparison', 'amenities'}

HOW_IT_WORKS = """
HOW SHUBHARAMBH WORKS:
- Browse categories: venues, decorators, DJs, caterers, photographers, makeup artists, mehendi artists, invitation designers, pandits, choreographers, bridal wear, anchoring, karaoke
- Every listing is verified by the admin team before going live
- Users can "Send Enquiry" for quotes without sharing personal contact
- Users can "Book Appointment/Visit" for serious inquiries (contact shared)
- Vendors respond with accept/reject and a message
- All communication happens via the platform dashboard
- Event types: Wedding, Engagement, Birthday, Anniversary, Reception, Pre-wedding, Mehendi, Sangeet, Bachelor Party, Bridal Shower, Baby Shower
- Platform is based in India covering major cities"""

SYSTEM_PROMPT = """You are **Shubhi** 🙏, the warm and knowledgeable AI concierge for **Shubharambh**, India's trusted event & wedding planning platform.

## Your Personality
- Friendly, experienced wedding planner who genuinely cares
- Use occasional Hindi words naturally ("bilkul", "zaroor", "shaadi", "badhiya")
- Emojis sparingly (max 1-2 per message)
- Sound like a real person, not a robot

## FORMATTING RULES

Keep responses SHORT, SCANNABLE and STRUCTURED.

### When listing venues/services use this exact card format:

1 short greeting line (max 15 words), then for EACH venue/service:

---
**🏛️ Venue Name Here**
📍 Location, City
💰 ₹50K – ₹2L per event
👥 100–500 guests
⭐ 4.5 (120 reviews)
📌 Key highlight in 5 words max
---

Then 1 short closing line asking if they want to send an enquiry or know more.

### For general questions:
- Max 3-4 short lines
- Use bullet points, not paragraphs

### For comparisons:
Use the card format above for each, then add:
**🏆 My Pick:** One line recommendation with reason.

### For pricing questions:
- Lead with the number: "**₹50K – ₹2L** for venues in Hyderabad"
- Then 1-2 lines of context max

## STRICT RULES
- NEVER write paragraphs longer than 2 lines
- NEVER reveal database access, speak naturally
- NEVER invent details not in the provided context
- If no results: 1 empathetic line + suggest browsing the website
- After listing venues/services, ALWAYS ask: "Would you like to send an enquiry to any of these venues?"
- Use **bold** for venue names, prices and key info
- Keep total response under 250 words

## Platform Details
- Users can "Send Enquiry" for quotes or "Book Appointment" for visits
- All vendors verified by Shubharambh team
- Contact details protected until vendor accepts
- Covers major Indian cities"""


def detect_intent(message):
    lower = message.lower()
    intents = [intent for intent, keywords in INTENT_KEYWORDS.items()
               if any(keyword in lower for keyword in keywords)]
    return intents or ['general']


def extract_city(message):
    lower = message.lower()
    for city in CITIES:
        if city in lower:
            return city
    for area in HYDERABAD_AREAS:
        if area in lower:
            return 'hyderabad'
    return None


def _first_keyword_match(message, table):
    lower = message.lower()
    for keyword, value in table:
        if keyword in lower:
            return value
    return None


def extract_category(message):
    return _first_keyword_match(message, CATEGORY_KEYWORDS)


def extract_event_type(message):
    return _first_keyword_match(message, EVENT_KEYWORDS)


def extract_capacity_hint(message):
    """``(min, max)`` guest range implied by the message, or None"""
    lower = message.lower()
    match = re.search(r'(\d+)\s*(guest|people|person|pax|seat)', lower)
    if match:
        count = int(match.group(1))
        return max(1, count - 50), count + 100
    if 'small' in lower or 'intimate' in lower:
        return 1, 100
    if 'medium' in lower:
        return 100, 300
    if 'large' in lower or 'grand' in lower or 'big' in lower:
        return 300, 2000
    return None


def extract_budget_hint(message):
    """``(min, max)`` budget in rupees implied by the message, or None"""
    lower = message.lower()
    match = re.search(r'(under|below|within|max|upto|up to)\s*(\d+)\s*lakh', lower)
    if match:
        return 0, int(match.group(2)) * 100000
    match = re.search(r'(\d+)\s*(?:to|-)\s*(\d+)\s*lakh', lower)
    if match:
        return int(match.group(1)) * 100000, int(match.group(2)) * 100000
    if 'cheap' in lower or 'affordable' in lower or 'budget' in lower:
        return 0, 300000
    if 'premium' in lower or 'luxury' in lower or 'expensive' in lower:
        return 500000, 10000000
    return None


def _price_text(venue):
    return f'₹{venue.price_min / 1000:.0f}K – ₹{venue.price_max / 1000:.0f}K'


def _venue_card(index, venue):
    rating = f'{venue.rating:.1f} ⭐ ({venue.review_count} reviews)' if venue.rating > 0 else 'New listing ✨'
    if venue.highlights:
        highlight = venue.highlights[0]
    else:
        highlight = ', '.join((venue.amenities or [])[:3])
    return (f'VENUE {index}: ID="{venue.id}" | Name="{venue.name}" | Location="{venue.location}, {venue.city}" | '
            f'Price="{_price_text(venue)} {venue.price_unit or "per event"}" | '
            f'Capacity="{venue.capacity_min}–{venue.capacity_max} guests" | Rating="{rating}" | '
            f'Category="{venue.category}" | Highlight="{highlight}"')


def _brief_card(index, venue):
    rating = f'{venue.rating:.1f} ⭐' if venue.rating > 0 else 'New ✨'
    return (f'VENUE {index}: ID="{venue.id}" | Name="{venue.name}" | Location="{venue.location}, {venue.city}" | '
            f'Price="{_price_text(venue)}" | Rating="{rating}" | Category="{venue.category}"')


def _matching_listings(category, city, event_type, capacity, budget):
    query = visible_listings()
    if category:
        query = query.filter(Venue.category == category)
    if city:
        query = query.filter(Venue.city.ilike(f'%{city}%'))
    if capacity:
        query = query.filter(Venue.capacity_max >= capacity[0])
    if budget:
        query = query.filter(Venue.price_min <= budget[1])
        if budget[0]:
            query = query.filter(Venue.price_max >= budget[0])
    venues = query.order_by(Venue.rating.desc(), Venue.review_count.desc(), Venue.id.asc()).all()
    if event_type:
        venues = [venue for venue in venues if event_type in (venue.event_types or [])]
    return venues[:MATCH_LIMIT]


def build_context(message, intents):
    """Internal context block describing the marketplace for the last user message"""
    city = extract_city(message)
    category = extract_category(message)
    event_type = extract_event_type(message)
    capacity = extract_capacity_hint(message)
    budget = extract_budget_hint(message)
    parts = []

    try:
        total_listings = visible_listings().count()
        total_vendors = Vendor.query.filter(Vendor.status == ListingStatus.APPROVED,
                                            Vendor.is_active.is_(True)).count()
        parts.append(f'PLATFORM STATS: {total_listings} verified venues/services, {total_vendors} verified vendors, '
                     f'{len(CATEGORIES)} categories.')
        parts.append('CATEGORIES: ' + ', '.join(c.display_name for c in CATEGORIES.values()))

        if SEARCH_INTENTS.intersection(intents) or category or city or event_type:
            venues = _matching_listings(category, city, event_type, capacity, budget)
            if venues:
                parts.append(f'\nMATCHING RESULTS ({len(venues)} found). Present each as a CARD using the exact '
                             f'format from instructions:\n')
                parts.extend(_venue_card(i, venue) for i, venue in enumerate(venues, 1))
            else:
                broader = visible_listings()
                if category:
                    broader = broader.filter(Venue.category == category)
                elif city:
                    broader = broader.filter(Venue.city.ilike(f'%{city}%'))
                broader = broader.order_by(Venue.rating.desc(), Venue.id.asc()).limit(BROADER_LIMIT).all()
                if broader:
                    parts.append('\nNo exact match. Show these RELATED options as cards:\n')
                    parts.extend(_brief_card(i, venue) for i, venue in enumerate(broader, 1))
                else:
                    parts.append('\nNo venues/services found matching these criteria.')

        if 'location' in intents and city:
            in_city = visible_listings().filter(Venue.city.ilike(f'%{city}%'))
            city_categories = sorted({row[0] for row in in_city.with_entities(Venue.category).distinct()})
            parts.append(f'\nIN {city.upper()}: {in_city.count()} listings across: '
                         f'{", ".join(city_categories) or "None yet"}')

        if category:
            count = visible_listings().filter(Venue.category == category).count()
            avg_rating, avg_min, avg_max = (visible_listings()
                                            .filter(Venue.category == category, Venue.rating > 0)
                                            .with_entities(func.avg(Venue.rating), func.avg(Venue.price_min),
                                                           func.avg(Venue.price_max))
                                            .one())
            if avg_rating is not None:
                parts.append(f'{category.upper()} STATS: {count} listings | Avg rating: {avg_rating:.1f} | '
                             f'Avg price: ₹{avg_min / 1000:.0f}K - ₹{avg_max / 1000:.0f}K')

        if 'booking' in intents or 'about' in intents:
            parts.append(HOW_IT_WORKS)
    except Exception as e:
        logger.error(f"Chat context query failed: {e}")
        db.session.rollback()
        parts.append('Database query had an issue. Respond with general platform knowledge.')

    return '\n'.join(parts)


def get_chat_client():
    """Client from app extensions (tests inject one), else an OpenAI-compatible client when a key is set"""
    client = current_app.extensions.get('chat_client')
    if client is not None:
        return client
    api_key = current_app.config.get('GROQ_API_KEY')
    if not api_key:
        return None
    client = OpenAI(base_url=current_app.config['CHAT_API_BASE_URL'], api_key=api_key)
    current_app.extensions['chat_client'] = client
    return client


def build_llm_messages(messages, context):
    llm_messages = [{'role': 'system', 'content': SYSTEM_PROMPT}]
    recent = messages[-HISTORY_LIMIT:]
    for i, msg in enumerate(recent):
        content = msg.get('content') or ''
        if i == len(recent) - 1 and msg.get('role') == 'user':
            content = f'[INTERNAL DATABASE CONTEXT - DO NOT MENTION TO USER]\n{context}\n\n[USER MESSAGE]\n{content}'
        llm_messages.append({'role': msg.get('role'), 'content': content})
    return llm_messages


def chat_reply(messages):
    """Reply text for a conversation. Always succeeds, degrading to a friendly fallback"""
    messages = [m for m in (messages or []) if isinstance(m, dict) and m.get('role') in ('user', 'assistant')]
    client = get_chat_client()
    if client is None:
        logger.warning("Chat requested but no API key is configured")
        return {'message': NO_KEY_REPLY}, None, 200
    try:
        user_messages = [m for m in messages if m['role'] == 'user']
        last_user_message = (user_messages[-1].get('content') or '') if user_messages else ''
        intents = detect_intent(last_user_message)
        logger.info(f"Chat intents: {intents} | message: {last_user_message[:80]}")
        context = build_context(last_user_message, intents)
        response = client.chat.completions.create(
            model=current_app.config.get('CHAT_MODEL', 'llama-3.3-70b-versatile'),
            messages=build_llm_messages(messages, context),
            max_tokens=500,
            temperature=0.6,
            top_p=0.9,
        )
        reply = response.choices[0].message.content if response.choices else None
        return {'message': reply or EMPTY_REPLY}, None, 200
    except Exception as e:
        logger.error(f"Chat completion failed: {e}")
        return {'message': ERROR_REPLY}, None, 200
