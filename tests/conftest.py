"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from devsync.parsers.java_parser import JavaParser

# Sample Java code for testing
SAMPLE_JAVA_ORDER_SERVICE = """package com.shop.orders;

public class OrderService {

    public enum OrderStatus {
        PENDING,
        SHIPPED,
        DELIVERED
    }

    public String describe(OrderStatus status) {
        switch (status) {
            case PENDING:
                return "Waiting";
            case SHIPPED:
                return "On the way";
            case DELIVERED:
                return "Done";
        }
        return "Unknown";
    }
}
"""

SAMPLE_JAVA_PRICING = """package com.shop.pricing;

public class Pricing {

    public int discountFor(int tier) {
        switch (tier) {
            case 1:
                return 5;
            case 2:
                return 10;
        }
        return 0;
    }

    public int discountWithDefault(int tier) {
        switch (tier) {
            case 1:
                return 5;
            default:
                return 0;
        }
    }
}
"""

SAMPLE_JAVA_CALCULATOR = """public class Calculator {
    public int compute() {
        int a = 1;
        int b = 2;
        int c = 3;
        return b;
    }

    public void log(String message, int level) {
        System.out.println(message);
    }
}
"""

SAMPLE_JAVA_FILE_COPIER = """import java.io.FileInputStream;
import java.io.IOException;

public class FileCopier {
    public void copy(String path) throws IOException {
        FileInputStream input = new FileInputStream(path);
        input.read();
    }

    public void copySafely(String path) throws IOException {
        FileInputStream input = new FileInputStream(path);
        try {
            input.read();
        } finally {
            input.close();
        }
    }

    public void watch(Button button, ActionListener listener) {
        button.addActionListener(listener);
    }

    public void startWorker(Runnable task) {
        Thread worker = new Thread(task);
        worker.start();
    }
}
"""

SAMPLE_JAVA_LOADER = """import java.io.IOException;

public class Loader {
    public void load() {
        try {
            read();
        } catch (IOException e) {
        }
        try {
            read();
        } catch (IllegalStateException ignored) {
        }
        try {
            read();
        } catch (RuntimeException e) {
            System.out.println(e);
        }
        try {
            read();
        } catch (Exception e) {
            throw new IllegalStateException("Could not read the configuration", e);
        }
    }

    private void read() throws IOException {
    }
}
"""

SAMPLE_JAVA_CLEAN = """package com.shop.model;

public class Customer {
    private final String name;

    public Customer(String name) {
        this.name = name;
    }

    public String getName() {
        return name;
    }
}
"""

SAMPLE_JAVA_BROKEN = """public class Broken {
    public void run( {
        int x = ;
    }
}
"""


@pytest.fixture(scope="session")
def java_parser():
    return JavaParser()


@pytest.fixture
def parse_java(java_parser):
    """Parse a Java snippet into a JavaSource."""

    def _parse(code: str, file_path: str = "Sample.java"):
        return java_parser.parse(code, file_path)

    return _parse


@pytest.fixture
def sample_java_order_service():
    return SAMPLE_JAVA_ORDER_SERVICE


@pytest.fixture
def sample_java_pricing():
    return SAMPLE_JAVA_PRICING


@pytest.fixture
def sample_java_calculator():
    return SAMPLE_JAVA_CALCULATOR


@pytest.fixture
def sample_java_file_copier():
    return SAMPLE_JAVA_FILE_COPIER


@pytest.fixture
def sample_java_loader():
    return SAMPLE_JAVA_LOADER


@pytest.fixture
def sample_java_clean():
    return SAMPLE_JAVA_CLEAN


@pytest.fixture
def sample_java_broken():
    return SAMPLE_JAVA_BROKEN


@pytest.fixture
def java_project(tmp_path: Path) -> Path:
    """A small on-disk project with a mix of findings, a parse failure and excluded files."""
    root = tmp_path / "shop"
    sources = root / "src" / "main" / "java" / "com" / "shop"
    sources.mkdir(parents=True)
    (sources / "OrderService.java").write_text(SAMPLE_JAVA_ORDER_SERVICE)
    (sources / "Pricing.java").write_text(SAMPLE_JAVA_PRICING)
    (sources / "Calculator.java").write_text(SAMPLE_JAVA_CALCULATOR)
    (sources / "FileCopier.java").write_text(SAMPLE_JAVA_FILE_COPIER)
    (sources / "Customer.java").write_text(SAMPLE_JAVA_CLEAN)
    (sources / "Broken.java").write_text(SAMPLE_JAVA_BROKEN)
    (sources / "README.md").write_text("# Shop\n")

    tests_dir = root / "src" / "test" / "java"
    tests_dir.mkdir(parents=True)
    (tests_dir / "PricingCheck.java").write_text(SAMPLE_JAVA_PRICING)

    target = root / "target" / "generated"
    target.mkdir(parents=True)
    (target / "Generated.java").write_text(SAMPLE_JAVA_PRICING)
    return root
