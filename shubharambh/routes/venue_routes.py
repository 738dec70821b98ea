from flask_restx import Namespace, Resource, reqparse
from ..categories import is_valid_category
from ..services import marketplace_service
from ..utils.auth_middleware import current_session
from ..utils.util import to_response

venue_ns = Namespace('venues', description='Public marketplace of approved listings')

listing_parser = reqparse.RequestParser()
listing_parser.add_argument('location', type=str, location='args', help='City or area')
listing_parser.add_argument('category', type=str, location='args', help='Category slug')
listing_parser.add_argument('minCapacity', type=int, location='args', help='Minimum guest capacity')
listing_parser.add_argument('eventType', type=str, location='args', help='Event type slug')
listing_parser.add_argument('maxPrice', type=int, location='args', help='Upper bound for the starting price')

location_parser = reqparse.RequestParser()
location_parser.add_argument('location', type=str, location='args', help='City or area')

category_parser = reqparse.RequestParser()
category_parser.add_argument('category', type=str, location='args', help='Category slug')

search_parser = reqparse.RequestParser()
search_parser.add_argument('q', type=str, location='args', help='Search term')


@venue_ns.route('')
class VenueList(Resource):
    @venue_ns.expect(listing_parser)
    def get(self):
        """Approved listings, optionally filtered"""
        args = listing_parser.parse_args()
        return to_response(marketplace_service.list_all(
            location=args['location'],
            category=args['category'],
            min_capacity=args['minCapacity'],
            event_type=args['eventType'],
            max_price=args['maxPrice']
        ))


@venue_ns.route('/featured')
class FeaturedVenues(Resource):
    def get(self):
        """Top rated venues for the home page"""
        return to_response(marketplace_service.featured())


@venue_ns.route('/search')
class VenueSearch(Resource):
    @venue_ns.expect(search_parser)
    def get(self):
        """Search listings by name, place or description"""
        return to_response(marketplace_service.search(search_parser.parse_args()['q']))


@venue_ns.route('/locations')
class VenueLocations(Resource):
    @venue_ns.expect(category_parser)
    def get(self):
        """Cities that have live listings"""
        return to_response(marketplace_service.distinct_locations(category_parser.parse_args()['category']))


@venue_ns.route('/category/<string:slug>')
class VenuesByCategory(Resource):
    @venue_ns.expect(location_parser)
    def get(self, slug):
        """Approved listings of one category"""
        if not is_valid_category(slug):
            return {'message': 'Category not found', 'error': 'not_found'}, 404
        location = location_parser.parse_args()['location']
        return to_response(marketplace_service.list_approved_by_category(slug, location))


@venue_ns.route('/<int:venue_id>')
class VenueResource(Resource):
    @venue_ns.doc(security='BearerAuth')
    def get(self, venue_id):
        """Listing details. Unapproved listings are shown only to their vendor and admins"""
        return to_response(marketplace_service.get_by_id(venue_id, current_session()))
