import jdbc

url = "jdbc:h2:~/path/to/database"

db = jdbc.Client(url, connectionPool={"maxOpenConnections": 0}, user="root")
other = jdbc.Client(url, connectionPool={"minIdleConnections": -1}, "root")
