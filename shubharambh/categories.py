"""Static category table shared by listing submission and quote requests.

Every category slug maps to one immutable ``Category`` record. The table is
built once at import time and exposed through a read-only mapping.
"""
from collections import namedtuple
from types import MappingProxyType

Category = namedtuple('Category', [
    'slug', 'display_name', 'listing_type', 'price_unit',
    'highlights', 'amenities', 'default_images', 'vendor_fields', 'quote_fields',
])

VendorField = namedtuple('VendorField', ['key', 'label', 'input_type'])
QuoteField = namedtuple('QuoteField', ['key', 'label', 'input_type', 'options', 'needs_guests'])

EVENT_TYPES = (
    'engagement', 'wedding', 'birthday', 'anniversary', 'wedding-reception',
    'pre-wedding', 'mehendi', 'sangeet', 'bachelor-party', 'bridal-shower', 'baby-shower',
)


def _unsplash(*photo_ids):
    return tuple(f'https://images.unsplash.com/{photo_id}?w=800&auto=format&fit=crop' for photo_id in photo_ids)


def _text(key, label):
    return VendorField(key, label, 'text')


def _number(key, label):
    return VendorField(key, label, 'number')


def _select(key, label, options, needs_guests):
    return QuoteField(key, label, 'select', tuple(options), needs_guests)


def _free(key, label, needs_guests):
    return QuoteField(key, label, 'text', (), needs_guests)


_EXPERIENCE = _number('experience', 'Years of Experience')

_CATEGORIES = (
    Category(
        slug='venues',
        display_name='Venues',
        listing_type='venue',
        price_unit='per event',
        highlights=('Premium Venue', 'Verified Vendor', 'New Listing'),
        amenities=('Parking', 'AC', 'Valet Parking', 'Stage', 'Dining Area'),
        default_images=_unsplash('photo-1519167758481-83f550bb49b3', 'photo-1464366400600-7168b8af9bc3'),
        vendor_fields=(
            _number('capacity', 'Maximum Capacity (guests)'),
            _text('venueType', 'Venue Type'),
        ),
        quote_fields=(
            _select('venueType', 'Venue Type Preference',
                    ['Banquet Hall', 'Lawn/Garden', 'Hotel', 'Resort', 'Farmhouse', 'Destination'], True),
            _select('seatingStyle', 'Seating Arrangement',
                    ['Theater Style', 'Cluster/Round Tables', 'U-Shape', 'Mixed'], True),
            _free('amenities', 'Required Amenities', True),
        ),
    ),
    Category(
        slug='decorators',
        display_name='Decorators',
        listing_type='decorator',
        price_unit='per event',
        highlights=('Creative Designs', 'Verified Decorator', 'New Listing'),
        amenities=('Theme Decor', 'Floral Arrangements', 'Lighting', 'Stage Setup'),
        default_images=_unsplash('photo-1478146896981-b80fe463b330', 'photo-1519741497674-611481863552'),
        vendor_fields=(
            _text('decorStyles', 'Decoration Styles'),
            _number('teamSize', 'Team Size'),
        ),
        quote_fields=(
            _free('theme', 'Theme Preference', True),
            _select('setting', 'Event Setting',
                    ['Indoor', 'Outdoor', 'Both Indoor & Outdoor', 'Terrace/Rooftop'], True),
            _free('elements', 'Key Decoration Elements', True),
            _select('lighting', 'Lighting Requirements',
                    ['Basic Lighting', 'Full Mood Lighting', 'String Lights Only', 'LED + Effects'], True),
        ),
    ),
    Category(
        slug='djs',
        display_name='DJ & Entertainment',
        listing_type='dj',
        price_unit='per event',
        highlights=('Crowd Favorite', 'Verified Artist', 'New Listing'),
        amenities=('Sound System', 'LED Lights', 'MC Services', 'Fog Machine'),
        default_images=_unsplash('photo-1493225457124-a3eb161ffa5f', 'photo-1571266028243-e4733b0f0bb0'),
        vendor_fields=(
            _text('musicStyles', 'Music Styles'),
            _text('equipment', 'Equipment Provided'),
            _EXPERIENCE,
        ),
        quote_fields=(
            _select('duration', 'DJ Service Duration', ['2-3 Hours', '4-5 Hours', '6-8 Hours', 'Full Night'], True),
            _free('musicStyle', 'Music Preference', True),
            _select('equipment', 'Equipment Needed',
                    ['Sound System Only', 'Sound + Lighting', 'Sound + Light + LED', 'Full Setup + Effects'], True),
            _select('additionalServices', 'Additional Services',
                    ['DJ Only', 'DJ + Dhol', 'DJ + Emcee', 'Full Entertainment Package'], True),
        ),
    ),
    Category(
        slug='caterers',
        display_name='Caterers',
        listing_type='caterer',
        price_unit='per plate',
        highlights=('Quality Food', 'Verified Caterer', 'New Listing'),
        amenities=('Multi-Cuisine', 'Live Counters', 'Buffet', 'Service Staff'),
        default_images=_unsplash('photo-1555244162-803834f70033', 'photo-1504674900247-0877df9cc836'),
        vendor_fields=(
            _text('cuisines', 'Cuisines Offered'),
            _number('minPlates', 'Minimum Order (plates)'),
            _number('maxPlates', 'Maximum Capacity (plates)'),
        ),
        quote_fields=(
            _select('plateType', 'Plate Type', ['Veg', 'Non-Veg', 'Both', 'Jain'], True),
            _free('cuisines', 'Preferred Cuisines', True),
            _select('mealTime', 'Meal Service', ['Lunch', 'Dinner', 'High Tea', 'All Meals'], True),
            _select('serviceStyle', 'Service Style', ['Buffet', 'Plated', 'Live Counters', 'Mixed'], True),
        ),
    ),
    Category(
        slug='photographers',
        display_name='Photographers',
        listing_type='photographer',
        price_unit='per day',
        highlights=('Professional', 'Verified Photographer', 'New Listing'),
        amenities=('Candid Photography', 'Pre-Wedding Shoot', 'Album', 'Video'),
        default_images=_unsplash('photo-1537633552985-df8429e8048b', 'photo-1606216794074-735e91aa2c92'),
        vendor_fields=(
            _text('photoStyles', 'Photography Styles'),
            _text('equipment', 'Equipment'),
            _EXPERIENCE,
        ),
        quote_fields=(
            _select('coverage', 'Coverage Duration',
                    ['Half Day (4-6 hrs)', 'Full Day (8-10 hrs)', 'Multiple Days', '2-3 Hours'], False),
            _select('services', 'Services Required',
                    ['Photography Only', 'Videography Only', 'Both Photo + Video', 'Drone Coverage'], False),
            _select('deliverables', 'Deliverables Expected',
                    ['Digital Photos Only', 'Photos + Album', 'Cinematic Film + Photos', 'Pre-Wedding Shoot'], False),
            _select('team', 'Team Size Preference',
                    ['1 Photographer', '2 Photographers', '1 Photo + 1 Video', 'Full Team (3+)'], False),
        ),
    ),
    Category(
        slug='makeup',
        display_name='Makeup Artists',
        listing_type='makeup_artist',
        price_unit='per look',
        highlights=('Expert Artist', 'Verified Makeup Artist', 'New Listing'),
        amenities=('Bridal Makeup', 'Party Makeup', 'Hairstyling', 'Draping'),
        default_images=_unsplash('photo-1487412947147-5cebf100ffc2', 'photo-1516975080664-ed2fc6a32937'),
        vendor_fields=(
            _text('makeupStyles', 'Makeup Styles'),
            _text('servicesOffered', 'Services Offered'),
            _EXPERIENCE,
            _text('brands', 'Brands Used'),
        ),
        quote_fields=(
            _select('serviceFor', 'Makeup Service For',
                    ['Bride Only', 'Bride + 1-2 Family', 'Bride + 3-5 Family', 'Party Makeup'], False),
            _select('makeupType', 'Makeup Type',
                    ['HD Makeup', 'Airbrush Makeup', 'Traditional Makeup', 'Party/Glam Makeup'], False),
            _select('services', 'Additional Services',
                    ['Makeup Only', 'Makeup + Hairstyling', 'Makeup + Hair + Draping', 'Full Bridal Package'], False),
            _select('location', 'Service Location', ['At Your Venue/Home', 'At Salon/Studio', 'Flexible'], False),
        ),
    ),
    Category(
        slug='mehendi',
        display_name='Mehendi Artists',
        listing_type='mehendi_artist',
        price_unit='per hand',
        highlights=('Intricate Designs', 'Verified Mehendi Artist', 'New Listing'),
        amenities=('Bridal Mehendi', 'Arabic Design', 'Traditional Design', 'Guest Mehendi'),
        default_images=_unsplash('photo-1595675024853-0f3ec9098ac7', 'photo-1600612253723-3fbbb8f8b2c0'),
        vendor_fields=(
            _text('mehendiStyles', 'Mehendi Styles'),
            _text('mehendiType', 'Mehendi Type'),
            _EXPERIENCE,
        ),
        quote_fields=(),
    ),
    Category(
        slug='invitations',
        display_name='Invitations',
        listing_type='invitation',
        price_unit='per 100 cards',
        highlights=('Premium Cards', 'Verified Vendor', 'New Listing'),
        amenities=('Custom Design', 'Digital Cards', 'Box Invites', 'RSVP'),
        default_images=_unsplash('photo-1520854221256-17451cc331bf', 'photo-1604866830893-c13cafa515d5'),
        vendor_fields=(
            _text('cardTypes', 'Card Types'),
            _text('customization', 'Customization Options'),
            _number('minOrder', 'Minimum Order Quantity'),
        ),
        quote_fields=(),
    ),
    Category(
        slug='pandits',
        display_name='Pandits',
        listing_type='pandit',
        price_unit='per ceremony',
        highlights=('Experienced Pandit', 'Vedic Expert', 'New Listing'),
        amenities=('Wedding Ceremonies', 'Puja Services', 'Vedic Rituals', 'Consultation'),
        default_images=_unsplash('photo-1545048702-79362697f5fc', 'photo-1604608672516-f1b9b1d97a77'),
        vendor_fields=(
            _text('ceremonies', 'Ceremonies Performed'),
            _text('languages', 'Languages'),
            _EXPERIENCE,
        ),
        quote_fields=(),
    ),
    Category(
        slug='choreographers',
        display_name='Choreographers',
        listing_type='choreographer',
        price_unit='per performance',
        highlights=('Talented Choreographer', 'Verified Artist', 'New Listing'),
        amenities=('Bollywood Dance', 'Classical Dance', 'Group Performance', 'Training'),
        default_images=_unsplash('photo-1547153760-18fc86324498', 'photo-1508700929628-666bc8bd84ea'),
        vendor_fields=(
            _text('danceStyles', 'Dance Styles'),
            _number('teamSize', 'Team Size'),
            _EXPERIENCE,
        ),
        quote_fields=(),
    ),
    Category(
        slug='bridal-wear',
        display_name='Bridal Wear',
        listing_type='bridal_wear',
        price_unit='per day',
        highlights=('Premium Collection', 'Verified Store', 'New Listing'),
        amenities=('Lehenga', 'Sherwani', 'Sarees', 'Custom Fitting'),
        default_images=_unsplash('photo-1594463750939-ebb28c3f7f75', 'photo-1610117238813-5a8f46ebeab1'),
        vendor_fields=(
            _text('dressTypes', 'Dress Types'),
            _text('sizes', 'Sizes Available'),
        ),
        quote_fields=(),
    ),
    Category(
        slug='anchoring',
        display_name='Anchors & Emcees',
        listing_type='anchor',
        price_unit='per event',
        highlights=('Professional Anchor', 'Verified Artist', 'New Listing'),
        amenities=('Wedding Hosting', 'Corporate Events', 'Multilingual', 'Script Writing'),
        default_images=_unsplash('photo-1475721027785-f74eccf877e2', 'photo-1559223607-b4d0555ae227'),
        vendor_fields=(
            _text('eventSpecialties', 'Event Specialties'),
            _text('languages', 'Languages'),
            _EXPERIENCE,
        ),
        quote_fields=(),
    ),
    Category(
        slug='karaoke',
        display_name='Karaoke',
        listing_type='karaoke',
        price_unit='per event',
        highlights=('Fun Entertainment', 'Verified Vendor', 'New Listing'),
        amenities=('Professional Setup', 'Large Song Library', 'Party Games', 'Lighting'),
        default_images=_unsplash('photo-1516280440614-37939bbacd81', 'photo-1493225457124-a3eb161ffa5f'),
        vendor_fields=(
            _text('equipment', 'Equipment'),
            _text('songLibrary', 'Song Library'),
        ),
        quote_fields=(),
    ),
)

CATEGORIES = MappingProxyType({category.slug: category for category in _CATEGORIES})

# Categories whose quote form asks for a guest count
GUEST_REQUIRED_CATEGORIES = frozenset(
    category.slug for category in _CATEGORIES
    if any(field.needs_guests for field in category.quote_fields)
)


def get_category(slug):
    return CATEGORIES.get(slug)


def is_valid_category(slug):
    return slug in CATEGORIES


def display_name(slug):
    category = CATEGORIES.get(slug)
    return category.display_name if category else 'Services'


def needs_guest_count(slug):
    return slug in GUEST_REQUIRED_CATEGORIES


def category_to_dict(category):
    """Public JSON shape of a category record"""
    return {
        'slug': category.slug,
        'name': category.display_name,
        'type': category.listing_type,
        'priceUnit': category.price_unit,
        'highlights': list(category.highlights),
        'amenities': list(category.amenities),
        'defaultImages': list(category.default_images),
        'vendorFields': [
            {'key': f.key, 'label': f.label, 'type': f.input_type} for f in category.vendor_fields
        ],
        'quoteFields': [
            {'key': f.key, 'label': f.label, 'type': f.input_type,
             'options': list(f.options), 'needsGuests': f.needs_guests}
            for f in category.quote_fields
        ],
        'needsGuestCount': category.slug in GUEST_REQUIRED_CATEGORIES,
    }
