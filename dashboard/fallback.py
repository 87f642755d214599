"""Static data the dashboard shows when the API cannot be reached."""

FALLBACK_DATA = {
    "users": [
        {"id": 1, "name": "John Doe", "email": "john@example.com", "role": "customer", "status": "active"},
        {"id": 2, "name": "Jane Smith", "email": "jane@example.com", "role": "admin", "status": "active"},
        {"id": 3, "name": "Bob Johnson", "email": "bob@example.com", "role": "customer", "status": "inactive"},
        {"id": 4, "name": "Alice Brown", "email": "alice@example.com", "role": "customer", "status": "active"},
        {"id": 5, "name": "Charlie Wilson", "email": "charlie@example.com", "role": "moderator", "status": "active"},
    ],
    "userStats": {
        "totalUsers": 5243,
        "activeUsers": 4137,
        "newUsersToday": 27,
        "churnRate": "2.4%",
    },
    "products": [
        {"id": 1, "name": "Wireless Earbuds", "category": "Electronics", "price": 79.99, "stock": 243},
        {"id": 2, "name": "Smart Watch", "category": "Electronics", "price": 199.99, "stock": 120},
        {"id": 3, "name": "Yoga Mat", "category": "Fitness", "price": 29.99, "stock": 150},
        {"id": 4, "name": "Coffee Maker", "category": "Home", "price": 89.99, "stock": 87},
        {"id": 5, "name": "Desk Lamp", "category": "Home", "price": 39.99, "stock": 112},
    ],
    "productStats": {
        "totalProducts": 1243,
        "activeProducts": 1198,
        "outOfStockProducts": 37,
        "featuredProducts": 15,
    },
    "categoryDistribution": [
        {"name": "Electronics", "value": 35},
        {"name": "Clothing", "value": 25},
        {"name": "Home", "value": 20},
        {"name": "Fitness", "value": 10},
        {"name": "Books", "value": 10},
    ],
    "orderStats": {
        "totalOrders": 1234,
        "pendingOrders": 56,
        "completedOrders": 1178,
        "cancelledOrders": 0,
        "totalRevenue": 98765.0,
        "averageOrderValue": 83.84,
    },
    "orderStatusDistribution": [
        {"name": "Pending", "value": 30},
        {"name": "Processing", "value": 45},
        {"name": "Shipped", "value": 60},
        {"name": "Delivered", "value": 120},
    ],
    "salesStats": {
        "totalRevenue": 1234567.0,
        "totalOrders": 15648,
        "revenueGrowth": 12.3,
        "averageOrderValue": 78.9,
    },
    "monthlySales": [
        {"name": "January", "sales": 6100},
        {"name": "February", "sales": 5900},
        {"name": "March", "sales": 6800},
        {"name": "April", "sales": 6300},
        {"name": "May", "sales": 7100},
        {"name": "June", "sales": 7500},
        {"name": "July", "sales": 4200},
        {"name": "August", "sales": 3800},
        {"name": "September", "sales": 5100},
        {"name": "October", "sales": 4600},
        {"name": "November", "sales": 5400},
        {"name": "December", "sales": 7200},
    ],
    "dailySales": [
        {"name": "Mon", "sales": 1000},
        {"name": "Tue", "sales": 1200},
        {"name": "Wed", "sales": 900},
        {"name": "Thu", "sales": 1100},
        {"name": "Fri", "sales": 1300},
        {"name": "Sat", "sales": 1600},
        {"name": "Sun", "sales": 1400},
    ],
    "salesByCategory": [
        {"name": "Electronics", "value": 400},
        {"name": "Clothing", "value": 300},
        {"name": "Home & Garden", "value": 200},
        {"name": "Books", "value": 100},
        {"name": "Others", "value": 150},
    ],
    "trafficSources": [
        {"name": "Organic Search", "value": 4000},
        {"name": "Paid Search", "value": 3000},
        {"name": "Direct", "value": 2000},
        {"name": "Social Media", "value": 2780},
        {"name": "Referral", "value": 1890},
        {"name": "Email", "value": 2390},
    ],
    "revenueVsTargets": [
        {"month": "Jan", "revenue": 4000, "target": 3800},
        {"month": "Feb", "revenue": 3000, "target": 3200},
        {"month": "Mar", "revenue": 5000, "target": 4500},
        {"month": "Apr", "revenue": 4500, "target": 4200},
        {"month": "May", "revenue": 6000, "target": 5500},
        {"month": "Jun", "revenue": 5500, "target": 5800},
        {"month": "Jul", "revenue": 7000, "target": 6500},
    ],
}
