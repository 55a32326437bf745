"""HTTP resources receiving GitHub and Zoho webhook deliveries."""
