SYSTEM_PROMPT = (
    "You are a helpful assistant that converts natural language to {label} queries. "
    "Provide only the query without any explanation."
)

CONVERT_PROMPT = """Convert the following natural language query to {syntax_name}:
{text}

{label} query:"""

FALLBACK_NOTE = (
    "API connection issue - showing sample query. "
    "In production, this would connect to the hosted model API."
)

EXAMPLE_QUERIES = (
    "Show all users who registered in the last 30 days",
    "Find products with price greater than $100 and are in stock",
    "Count the number of orders grouped by status",
    "Get the average age of users from New York",
    "List customers who made purchases in the last quarter",
    "Find transactions with amount greater than average",
)

# Table -> fields, shown to users to help them phrase requests
SCHEMA_HINTS = {
    "users": ("id", "name", "email", "age", "location", "registration_date"),
    "products": ("id", "name", "price", "category", "in_stock", "created_at"),
    "orders": ("id", "user_id", "total", "status", "created_at"),
    "transactions": ("id", "order_id", "amount", "payment_method", "status"),
}
