"""Mock demat holdings returned by ``getUserHoldings``."""

USER_HOLDINGS = [
    {
        "img": "https://image-url.png",
        "name": "Tata Consultancy Service",
        "symbol": "TCS",
        "industry": "IT",
        "change": 2.05,
        "current_price": 26664.00,
        "quantity": 0.26231428,
        "on_orders": 0.05231428,
        "avg_price": 24500.64,
        "pnl": 2000,
    },
    {
        "img": "https://image-url2.png",
        "name": "HDFC Bank",
        "symbol": "HDFCBANK",
        "industry": "Banking",
        "change": -2.73,
        "current_price": 1598.29,
        "quantity": 2474.42361232,
        "on_orders": 0.256567,
        "avg_price": 1566.64,
        "pnl": 200,
    },
    {
        "img": "https://image-url3.png",
        "name": "Reliance Industries",
        "symbol": "RELIANCE",
        "industry": "Oil & Gas",
        "change": 1.45,
        "current_price": 2890.75,
        "quantity": 5.78923,
        "on_orders": 0,
        "avg_price": 2750.50,
        "pnl": 810.25,
    },
    {
        "img": "https://image-url4.png",
        "name": "Infosys",
        "symbol": "INFY",
        "industry": "IT",
        "change": 0.85,
        "current_price": 1450.60,
        "quantity": 10.5,
        "on_orders": 1.2,
        "avg_price": 1380.25,
        "pnl": 738.68,
    },
    {
        "img": "https://image-url5.png",
        "name": "Bharti Airtel",
        "symbol": "BHARTIARTL",
        "industry": "Telecom",
        "change": -0.32,
        "current_price": 1120.40,
        "quantity": 15.75,
        "on_orders": 0,
        "avg_price": 1150.80,
        "pnl": -478.80,
    },
]
