def fibonacci(n):
    if n <= 1:
        return n

    a, b = 0, 1

    for i in range(2, n + 1):
        temp = a + b
        a = b
        b = temp

    return b

# Calculate 10th fibonacci number
print("Fibonacci(10):", fibonacci(10))
