"""
Integration tests for catalog, inventory, reporting and operational endpoints.
"""


class TestProducts:

    def test_list_products(self, client, milk, bread):
        response = client.get('/api/products')

        assert response.status_code == 200
        products = response.get_json()
        assert [p['name'] for p in products] == ['Organic Whole Milk', 'White Bread']
        assert products[0]['price'] == '4.99'
        assert products[0]['category_name'] == 'Dairy'
        assert products[0]['stock_status'] == 'IN_STOCK'

    def test_search(self, client, milk, bread):
        response = client.get('/api/products/search?q=milk')

        assert [p['product_id'] for p in response.get_json()] == [milk.id]

    def test_search_requires_query(self, client):
        response = client.get('/api/products/search')

        assert response.status_code == 400
        assert response.get_json()['error'] == 'InvalidRequest'

    def test_categories_and_customers(self, client, dairy, walk_in_customer):
        assert [c['name'] for c in client.get('/api/categories').get_json()] == ['Dairy']
        assert client.get('/api/customers').get_json()[0]['name'] == 'Walk-in Customer'


class TestStock:

    def test_update_stock(self, client, cashier, milk):
        response = client.put(f'/api/products/{milk.id}/stock', json={
            'stock_quantity': 60, 'employee_id': cashier.id, 'notes': 'Delivery'
        })

        assert response.status_code == 200
        data = response.get_json()
        assert data['success'] is True
        assert data['product']['stock_quantity'] == 60

        movements = client.get(f'/api/products/{milk.id}/movements').get_json()
        assert len(movements) == 1
        assert movements[0]['direction'] == 'ADJUST'
        assert movements[0]['quantity'] == 15
        assert movements[0]['notes'] == 'Delivery'

    def test_negative_stock_rejected(self, client, milk):
        response = client.put(f'/api/products/{milk.id}/stock', json={'stock_quantity': -5})

        assert response.status_code == 400
        assert client.get('/api/products').get_json()[0]['stock_quantity'] == 45

    def test_invalid_employee_rejected(self, client, milk):
        for employee_id in ('abc', 999):
            response = client.put(f'/api/products/{milk.id}/stock', json={
                'stock_quantity': 50, 'employee_id': employee_id
            })

            assert response.status_code == 400
            assert response.get_json()['error'] == 'InvalidRequest'

        assert client.get(f'/api/products/{milk.id}/movements').get_json() == []

    def test_unknown_product(self, client):
        response = client.put('/api/products/999/stock', json={'stock_quantity': 5})

        assert response.status_code == 404
        assert response.get_json()['error'] == 'ProductNotFound'

    def test_sale_movements(self, client, cashier, milk):
        bill = client.post('/api/bills', json={
            'employee_id': cashier.id, 'items': [{'product_id': milk.id, 'quantity': 3}]
        }).get_json()['bill']

        movements = client.get(f'/api/products/{milk.id}/movements').get_json()
        assert movements[0]['direction'] == 'OUT'
        assert movements[0]['quantity'] == 3
        assert movements[0]['notes'] == f"Sale via Order {bill['order_number']}"

    def test_low_stock(self, client, milk, bread):
        client.put(f'/api/products/{bread.id}/stock', json={'stock_quantity': 0})

        products = client.get('/api/inventory/low-stock').get_json()
        assert [(p['product_id'], p['stock_status']) for p in products] == [(bread.id, 'OUT_OF_STOCK')]


class TestDashboard:

    def test_sales_summary(self, client, cashier, milk, bread):
        client.post('/api/bills', json={
            'employee_id': cashier.id,
            'items': [{'product_id': milk.id, 'quantity': 2}, {'product_id': bread.id, 'quantity': 1}]
        })

        summary = client.get('/api/sales/summary?period=week').get_json()
        assert summary['period'] == 'week'
        assert summary['total_orders'] == 1
        assert summary['total_sales'] == '14.01'
        assert summary['total_tax'] == '1.04'

        stats = client.get('/api/dashboard/stats').get_json()
        assert stats['today_orders'] == 1
        assert stats['today_sales'] == '14.01'
        assert stats['total_products'] == 2

    def test_invalid_period(self, client):
        assert client.get('/api/sales/summary?period=decade').status_code == 400


class TestOperational:

    def test_health(self, client):
        response = client.get('/api/health')

        assert response.status_code == 200
        assert response.get_json()['database'] == 'connected'

    def test_unknown_route(self, client):
        response = client.get('/api/nothing-here')

        assert response.status_code == 404
        assert response.get_json()['status'] == 'error'

    def test_metrics(self, client):
        client.get('/api/health')
        response = client.get('/metrics')

        assert response.status_code == 200
        assert 'billing_http_requests_total' in response.get_data(as_text=True)
