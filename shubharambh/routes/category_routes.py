from flask_restx import Namespace, Resource
from ..categories import CATEGORIES, EVENT_TYPES, get_category, category_to_dict
from ..services import marketplace_service
from ..utils.util import to_response

category_ns = Namespace('categories', description='Service categories and their form schemas')


@category_ns.route('')
class CategoryList(Resource):
    def get(self):
        """Get all categories (public)"""
        return [category_to_dict(category) for category in CATEGORIES.values()], 200


@category_ns.route('/counts')
class CategoryCounts(Resource):
    def get(self):
        """Number of live listings per category"""
        return to_response(marketplace_service.category_counts())


@category_ns.route('/event-types')
class EventTypes(Resource):
    def get(self):
        """Event types a listing can serve"""
        return list(EVENT_TYPES), 200


@category_ns.route('/<string:slug>')
class CategoryResource(Resource):
    def get(self, slug):
        """Get one category with its vendor and quote fields"""
        category = get_category(slug)
        if category is None:
            return {'message': 'Category not found', 'error': 'not_found'}, 404
        return category_to_dict(category), 200
