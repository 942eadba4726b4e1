import unittest

from tests.base import ToolnavTestCase
from toolnav.models import AdminUser, Category, Tool
from toolnav.seed import seed_database


class SeedTestCase(ToolnavTestCase):
    def seed(self):
        with self.flask_app.app_context():
            categories = seed_database()
            return {slug: c.id for slug, c in categories.items()}

    def test_seed_scenario(self):
        ids = self.seed()

        payload = self.app.get(f"/api/tools?categoryId={ids['development']}").get_json()
        self.assertEqual([t['name'] for t in payload['tools']], ['GitHub'])

        payload = self.app.get('/api/tools?search=notion').get_json()
        self.assertEqual([t['name'] for t in payload['tools']], ['Notion'])

    def test_seed_contents(self):
        self.seed()
        categories = self.app.get('/api/categories').get_json()
        self.assertEqual(
            sorted(c['slug'] for c in categories),
            ['ai', 'design', 'development', 'productivity']
        )
        featured = self.app.get('/api/tools?featured=true').get_json()
        self.assertEqual(
            sorted(t['name'] for t in featured['tools']),
            ['ChatGPT', 'Figma', 'GitHub']
        )

    def test_seed_is_idempotent(self):
        self.seed()
        self.seed()
        with self.flask_app.app_context():
            self.assertEqual(Category.query.count(), 4)
            self.assertEqual(Tool.query.count(), 4)
            self.assertEqual(AdminUser.query.filter_by(username='owner').count(), 1)

    def test_seeded_admin_can_log_in(self):
        self.seed()
        response = self.login('owner', 'owner-pass')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()['user']['email'], 'owner@example.com')

    def test_seed_command(self):
        runner = self.flask_app.test_cli_runner()
        result = runner.invoke(args=['seed'])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn('Database seeded.', result.output)
        with self.flask_app.app_context():
            self.assertEqual(Tool.query.count(), 4)

    def test_create_admin_command(self):
        runner = self.flask_app.test_cli_runner()
        result = runner.invoke(args=['create-admin', 'editor', 'first-pass', '--email', 'editor@example.com'])
        self.assertIn('created successfully', result.output)
        self.assertEqual(self.login('editor', 'first-pass').status_code, 200)
        self.logout()

        result = runner.invoke(args=['create-admin', 'editor', 'second-pass'])
        self.assertIn('password updated', result.output)
        self.assertEqual(self.login('editor', 'first-pass').status_code, 401)
        self.assertEqual(self.login('editor', 'second-pass').status_code, 200)


if __name__ == '__main__':
    unittest.main()
