import unittest
from unittest.mock import patch

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tests.base import ToolnavTestCase
from toolnav.extensions import db
from toolnav.models import ActivityLog, Category, Tool


class StoreFailureTestCase(ToolnavTestCase):
    """Database errors surface as a generic 500 and leave no partial writes."""

    def setUp(self):
        super().setUp()
        self.dev = self.make_category('Development', 'development')
        self.tool = self.make_tool(self.dev, 'GitHub')
        self.login()

    def _failing_commit(self):
        return patch.object(Session, 'commit', side_effect=SQLAlchemyError('disk I/O error'))

    def test_listing_failure(self):
        with patch('toolnav.services.catalog.query_tools', side_effect=SQLAlchemyError('connection lost')):
            with self.assertLogs(self.flask_app.logger, level='ERROR') as logs:
                response = self.app.get('/api/tools')
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.get_json(), {'error': 'Failed to fetch tools'})
        self.assertIn('Error fetching tools', logs.output[0])
        self.assertNotIn('connection lost', response.get_data(as_text=True))

    def test_category_listing_failure(self):
        with patch('toolnav.services.catalog.list_categories', side_effect=SQLAlchemyError('connection lost')):
            with self.assertLogs(self.flask_app.logger, level='ERROR'):
                response = self.app.get('/api/categories')
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.get_json(), {'error': 'Failed to fetch categories'})

    def test_create_category_failure_is_rolled_back(self):
        with self._failing_commit():
            with self.assertLogs(self.flask_app.logger, level='ERROR'):
                response = self.app.post('/api/categories', json=dict(name='Design', slug='design'))
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.get_json(), {'error': 'Failed to create category'})

        with self.flask_app.app_context():
            self.assertEqual(Category.query.filter_by(slug='design').count(), 0)
            self.assertEqual(ActivityLog.query.filter_by(action='Category Add').count(), 0)

        # The session is usable again afterwards
        response = self.app.post('/api/categories', json=dict(name='Design', slug='design'))
        self.assertEqual(response.status_code, 201)

    def test_update_tool_failure_is_rolled_back(self):
        with self._failing_commit():
            with self.assertLogs(self.flask_app.logger, level='ERROR'):
                response = self.app.put(f'/api/tools/{self.tool}', json=dict(
                    name='GitLab',
                    url='https://gitlab.com',
                    description='Other hosting',
                    categoryId=self.dev
                ))
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.get_json(), {'error': 'Failed to update tool'})

        with self.flask_app.app_context():
            self.assertEqual(db.session.get(Tool, self.tool).name, 'GitHub')

    def test_delete_category_failure_keeps_tools(self):
        with self._failing_commit():
            with self.assertLogs(self.flask_app.logger, level='ERROR'):
                response = self.app.delete(f'/api/categories/{self.dev}')
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.get_json(), {'error': 'Failed to delete category'})

        with self.flask_app.app_context():
            self.assertIsNotNone(db.session.get(Category, self.dev))
            self.assertIsNotNone(db.session.get(Tool, self.tool))

    def test_activity_failure(self):
        with patch('toolnav.routes.api.ActivityLog') as log_model:
            log_model.query.order_by.side_effect = SQLAlchemyError('connection lost')
            with self.assertLogs(self.flask_app.logger, level='ERROR'):
                response = self.app.get('/api/activity')
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.get_json(), {'error': 'Failed to fetch activity'})


if __name__ == '__main__':
    unittest.main()
